"""Intent translation.

The intent layer converts an English natural-language request into a strict `Intent` object that
carries the query category, its parameters, the generated SQL and an explanation.
"""
