"""Data contracts: DateValue, school calendar config, todates and layout types."""
