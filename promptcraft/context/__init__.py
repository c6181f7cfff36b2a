"""Context resolution — device, page and spacing decisions."""
