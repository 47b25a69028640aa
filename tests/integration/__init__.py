"""Integration test package.

These tests exercise the command line interface and the web API end to
end, from the CSV template to the written DOT or HTML output. They do
not need the Graphviz executables.
"""
