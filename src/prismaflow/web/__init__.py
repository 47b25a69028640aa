"""Web front-end for building flow diagrams in the browser.

Upload a filled-in CSV template, or post the counts as JSON, and get back
the DOT description or the interactive HTML widget.

To start the web server from the CLI use:
    prismaflow serve --port 8000
"""
