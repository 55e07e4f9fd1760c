"""
Category domain model.
Categories label time entries and are deactivated rather than deleted.
"""

import re


HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")

# Sentinel bucket for time entries logged without a category
NO_CATEGORY_ID = "no-category"
NO_CATEGORY_LABEL = "Sans categorie"
