"""Common literal values used across llmstxt.

These constants keep output filenames, default templates, and the preset
ignore lists centralized so the renderer, the build driver, and tests can
import the same values without drifting. Intended for internal use within the
llmstxt package.

Examples
--------
>>> from llmstxt import _constants
>>> _constants.LLMS_TXT_FILENAME
'llms.txt'
>>> "{toc}" in _constants.DEFAULT_LLMS_TXT_TEMPLATE
True
"""

LLMS_TXT_FILENAME = "llms.txt"
LLMS_FULL_TXT_FILENAME = "llms-full.txt"
INDEX_FILENAME = "index.md"
UNTITLED = "Untitled"
FALLBACK_TITLE = "LLMs Documentation"
FALLBACK_DETAILS = "This file contains links to all documentation sections."
FULL_TXT_SEPARATOR = "\n---\n\n"

DEFAULT_LLMS_TXT_TEMPLATE = """\
# {title}

{description}

{details}

## Table of Contents

{toc}"""

DEFAULT_DIRECTORY_LLMS_TXT_TEMPLATE = """\
# {title}

{description}

{details}

{navigation}
## Documentation

{toc}"""

UNNECESSARY_FILES: dict[str, tuple[str, ...]] = {
    "index_page": ("index.md",),
    "blog": ("blog/*", "blog.md", "posts/*", "posts.md"),
    "team": ("team.md", "team/*", "about/team.md", "about/team/*"),
}
