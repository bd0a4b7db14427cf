"""Request pipeline middleware: logging, security headers, timing, rate limits, auth."""
