"""Chart payload encoding and HTML rendering helpers.

The analysis package produces `Chart` DTOs; this package turns them into the
JSON payload and the HTML page consumed by the browser.
"""
