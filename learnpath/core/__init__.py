"""Domain constants and the exception hierarchy."""
