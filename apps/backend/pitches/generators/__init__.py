"""Script and voice generation for sales pitches."""
