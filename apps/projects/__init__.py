"""Activities offered at the camp (skiing, ice fishing, barbecue and so on)."""
