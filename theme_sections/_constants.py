"""Common literal values used across theme_sections.

These constants keep role filenames, wrapper tags, and default layout paths
centralized so the compiler, the builder, and tests import the same values
without drifting. Intended for internal use within the theme_sections package.

Examples
--------
>>> from theme_sections import _constants
>>> _constants.SCHEMA_TEMPLATE.format(content="{}\\n")
'{% schema %}\\n{}\\n{% endschema %}\\n'
>>> _constants.OUTPUT_SUFFIX
'.liquid'
"""

STYLE_FILENAME = "style.liquid"
TEMPLATE_FILENAME = "template.liquid"
SCRIPT_FILENAME = "javascript.js"
SCHEMA_FILENAME = "schema.json"

OUTPUT_SUFFIX = ".liquid"

SCRIPT_TEMPLATE = "{{% javascript %}}\n{content}{{% endjavascript %}}\n"
SCHEMA_TEMPLATE = "{{% schema %}}\n{content}{{% endschema %}}\n"

# Depth of ``<src>/sections`` in the default layout, counted in path segments.
SECTIONS_ROOT_DEPTH = 2

DEFAULT_SRC_ROOT = "src"
DEFAULT_DIST_ROOT = "dist"
SECTIONS_DIRNAME = "sections"
DEFAULT_DEBOUNCE = 0.05
