"""Customer CRM: guests, their acquisition source and lifetime spend."""
