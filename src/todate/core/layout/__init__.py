"""Timeline layout: lanes, year-axis ticks and the span controller."""
