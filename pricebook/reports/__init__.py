"""Receipt exports and the Excel price book."""
