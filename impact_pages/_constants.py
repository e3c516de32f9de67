"""Common literal values used across impact_pages.

These constants keep reserved filenames, sentinel names, and template paths
centralized so the publisher, navigation builder, and tests share one source of
truth. Intended for internal use within the impact_pages package.

Examples
--------
>>> from impact_pages import _constants
>>> _constants.GLOBAL_LONGNAME
'global'
>>> "class" in _constants.CONTAINER_KINDS
True
"""

INDEX_BASENAME = "index"
GLOBAL_LONGNAME = "global"
FILE_EXTENSION = ".html"
TUTORIAL_PREFIX = "tutorial-"

CONTAINER_KINDS = ("class", "module", "namespace", "mixin", "external")
GLOBAL_KINDS = ("member", "function", "constant", "typedef")

SCOPE_PUNCTUATION = {"static": ".", "instance": "#", "inner": "~"}

TEMPLATE_SUBDIR = "tmpl"
STATIC_SUBDIR = "static"
STATIC_TEMPLATE_DEPTH = 3
STATIC_USER_DEPTH = 10

DEFAULT_SITE_NAME = "Impact++"
DEFAULT_SITE_URL = "https://github.com/collinhover/impactplusplus/"
DEFAULT_LOGO = "img/logo_impactplusplus_25.png"
DEFAULT_ROOT_NAMESPACE = "ig"
DEFAULT_EXCLUDED_NAMESPACE = "ig.CONFIG"
DEFAULT_FOLDER_ALIASES = {"plusplus": "core"}
DEFAULT_MAINPAGE_TITLE = "Main Page"
