"""
SignConnect core - live transcript to scenario context to reply suggestions.
"""
