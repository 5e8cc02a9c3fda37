"""Community validation and abuse report handling."""
