"""CV-Tailor: human-reviewed CV tailoring with one-page PDF export."""

__version__ = "0.1.0"
