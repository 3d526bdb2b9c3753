"""Common literal values used across docweld.

These constants keep source-tree filenames, markup conventions, and head
metadata separators centralized so the loader, renderer, and tests can import
the same values without drifting.

Examples
--------
>>> from docweld import _constants
>>> _constants.CONTENT_FILENAME
'content.md'
>>> "pages/guide".removeprefix(_constants.LISTING_PREFIX)
'guide'
"""

CONTENT_FILENAME = "content.md"
METADATA_FILENAME = "metadata.json"
CONTENT_SUFFIX = ".md"
METADATA_SUFFIX = ".json"

LISTING_PREFIX = "pages/"
INDEX_FILENAME = "index.html"
STYLESHEET_FILENAME = "highlight.css"

ARTICLE_TEMPLATE = "article.html"
DIRECTORY_TEMPLATE = "directory.html"

TITLE_SEPARATOR = " :: "
KEYWORD_SEPARATOR = ","
GITHUB_URL_TEMPLATE = "https://github.com/{handle}"
GITHUB_LABEL = "[github]"

# The highlighter re-tokenizes an escaped ``&gt;`` into this sequence.
HIGHLIGHT_DEFECT = '&amp;<span class="identifier">gt</span>;'
HIGHLIGHT_REPAIR = "&gt;"
