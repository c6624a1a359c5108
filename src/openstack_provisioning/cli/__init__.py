"""``osprov`` command-line interface."""
