"""Component discovery boundary.

Strategies that scan source trees live outside this package; they only
reach the model through :meth:`ComponentFinder.found_component`.
"""
