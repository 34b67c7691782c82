"""Local guide API: places, reviews and social feeds."""
