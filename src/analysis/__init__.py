"""Result analysis.

The analysis layer turns already-executed result rows into a short summary, a list of insight
sentences and a chart descriptor, keyed by the intent category.
"""
