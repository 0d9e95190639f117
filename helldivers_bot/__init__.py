"""Discord bot relaying Helldivers 2 galactic war data."""
