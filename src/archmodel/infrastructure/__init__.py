"""Infrastructure layer — workspace file I/O and the networkx graph view.

Infrastructure may import from domain. It must never import from services,
commands, output, or config.
"""
