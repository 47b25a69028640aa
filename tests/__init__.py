"""Test suite for prismaflow.

Unit tests cover text formatting, the data models, the graph model and
the diagram builder; integration tests drive the CLI and the web API.
To run the tests, execute `pytest` from the project root.
"""
