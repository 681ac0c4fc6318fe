"""
xcsim CLI commands: simulator listing, bundle lookup, and OS inspection.
"""
