"""Label Report — rank a GitHub repository's open issues by label.

Fetches every open issue of a repository, groups the issues by label and
renders the per-label counts and percentages as a Markdown report or a
console table.
"""

__version__ = "0.1.0"
