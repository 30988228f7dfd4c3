"""Constants, unit conversion, RF math and shared helpers."""
