# html_pipeline/filters/mention.py
"""
Filter that replaces @user mentions with links to user profiles.

This filter:
- Links every @login to ``base_url``/login with a "user-mention" class
- Links reserved words (@mention, @mentions, ...) to the mention help page instead
- Ignores text inside <pre>, <code> and <a> elements
- Records mentioned logins in ``result["mentioned_users"]`` in reading order

Context:
    base_url (required): Root URL of user profile pages
    mention_info_url (optional): Target for reserved-word mentions
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, Optional

from django.utils.html import format_html

from .base import Filter
from .utils import join_url, walk_text_nodes

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(
    r"""
    (?:^|\W)                    # start of line or non-word char
    @((?>[a-z0-9][a-z0-9-]*))   # @login
    (?!/)                       # not a path like @user/repo
    (?=
        \.+[ \t]|               # dots followed by space
        \.+$|                   # dots at end of line
        [^0-9a-zA-Z_.]|         # non-word character except dot
        $                       # end of line
    )
    """,
    re.IGNORECASE | re.VERBOSE | re.MULTILINE,
)

# Mentioning one of these links to the help page rather than a user
DEFAULT_META_LOGINS = frozenset(["mention", "mentions", "mentioned", "mentioning"])

DEFAULT_MENTION_INFO_URL = "https://github.com/blog/821"

# Don't look for mentions in text nodes that are children of these elements
IGNORE_PARENTS = frozenset(["pre", "code", "a"])


def mentioned_logins_in(
    text: str,
    replace: Callable[[str, str, bool], str],
    meta_logins: Iterable[str] = DEFAULT_META_LOGINS,
) -> str:
    """
    Find @mentions in text and substitute each match.

    Args:
        text: Text to search
        replace: Called with the full match, the login and whether the login
            is a reserved meta word. Its return value replaces the match.
        meta_logins: Reserved words, compared case-insensitively

    Returns:
        Text with every match replaced
    """
    meta_logins = frozenset(login.lower() for login in meta_logins)

    def _sub(match: re.Match) -> str:
        login = match.group(1)
        return replace(match.group(0), login, login.lower() in meta_logins)

    return MENTION_PATTERN.sub(_sub, text)


class MentionFilter(Filter):
    needs = ("base_url",)

    def __init__(self, meta_logins: Iterable[str] = DEFAULT_META_LOGINS):
        self.meta_logins = frozenset(login.lower() for login in meta_logins)

    def call(self, doc, context, result):
        mentioned_users = result.setdefault("mentioned_users", [])
        mentioned_users.clear()

        base_url = context.get("base_url")
        info_url = context.get("mention_info_url") or DEFAULT_MENTION_INFO_URL

        def _link(match: str, login: str, is_meta: bool) -> str:
            if is_meta:
                link = self.link_to_mention_info(login, info_url)
            else:
                link = self.link_to_mentioned_user(login, base_url)
                if link:
                    mentioned_users.append(login)
            return match.replace(f"@{login}", link, 1) if link else match

        walk_text_nodes(
            doc,
            IGNORE_PARENTS,
            lambda text: mentioned_logins_in(text, _link, self.meta_logins),
            trigger="@",
        )

        result["mentioned_users"] = list(dict.fromkeys(mentioned_users))
        logger.debug(f"Found {len(result['mentioned_users'])} mentioned users")
        return doc

    def link_to_mention_info(self, login: str, info_url: str) -> str:
        return format_html(
            '<a href="{}" class="user-mention">@{}</a>', info_url, login
        )

    def link_to_mentioned_user(self, login: str, base_url: Optional[str]) -> Optional[str]:
        if not base_url:
            return None
        url = join_url(base_url, login)
        return format_html('<a href="{}" class="user-mention">@{}</a>', url, login)
