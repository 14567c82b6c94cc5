# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Staging index scraping.

The staging area is a plain Apache/Subversion directory listing. We don't
parse it as HTML: every artifact name shows up as an href value, so a
pattern anchored on the artifact prefix and terminated by the closing quote
is enough. Anything else on the page (parent links, other releases) lacks
the prefix and is ignored.
"""

import re

_NAME_CHARS = r"[^\"'<>/\s]"


def artifact_name_pattern(artifact_prefix: str) -> re.Pattern[str]:
    """
    Pattern for `<prefix><anything with a dot>"`, capturing the name.

    The version is escaped, so the dots in "0.2.4" match only dots.
    """
    return re.compile(
        rf"({re.escape(artifact_prefix)}{_NAME_CHARS}*\.{_NAME_CHARS}*)\""
    )


def find_artifact_names(index_html: str, artifact_prefix: str) -> list[str]:
    """
    Extract artifact file names from a directory listing page.

    Names are returned in page order with duplicates dropped, since some
    listings repeat the name in a title attribute.
    """
    names: list[str] = []
    seen: set[str] = set()
    for match in artifact_name_pattern(artifact_prefix).finditer(index_html):
        name = match.group(1)
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names
