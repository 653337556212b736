"""Fee, escrow, CVPI, settlement and reputation-tier calculations for a campaign marketplace."""
