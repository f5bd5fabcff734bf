"""Static table of known Web API methods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional, Tuple


@dataclass(frozen=True)
class MethodSpec:
    name: str
    path: str
    cursor_paginated: bool = False


def _table(paginated: Iterable[str], plain: Iterable[str]) -> Dict[str, MethodSpec]:
    table: Dict[str, MethodSpec] = {}
    for name in paginated:
        table[name] = MethodSpec(name=name, path=name, cursor_paginated=True)
    for name in plain:
        table[name] = MethodSpec(name=name, path=name)
    return dict(sorted(table.items()))


METHODS: Dict[str, MethodSpec] = _table(
    paginated=(
        "admin.apps.approved.list",
        "admin.apps.requests.list",
        "admin.apps.restricted.list",
        "admin.conversations.search",
        "admin.emoji.list",
        "admin.inviteRequests.approved.list",
        "admin.inviteRequests.denied.list",
        "admin.inviteRequests.list",
        "admin.teams.admins.list",
        "admin.teams.list",
        "admin.teams.owners.list",
        "admin.users.list",
        "apps.event.authorizations.list",
        "channels.list",
        "conversations.history",
        "conversations.list",
        "conversations.members",
        "conversations.replies",
        "files.info",
        "files.remote.list",
        "groups.list",
        "im.list",
        "mpim.list",
        "reactions.list",
        "stars.list",
        "users.conversations",
        "users.list",
    ),
    plain=(
        "admin.conversations.whitelist.add",
        "admin.conversations.whitelist.listGroupsLinkedToChannel",
        "admin.conversations.whitelist.remove",
        "api.test",
        "apps.uninstall",
        "auth.revoke",
        "auth.test",
        "bots.info",
        "channels.create",
        "channels.history",
        "channels.info",
        "channels.join",
        "chat.delete",
        "chat.deleteScheduledMessage",
        "chat.getPermalink",
        "chat.meMessage",
        "chat.postEphemeral",
        "chat.postMessage",
        "chat.scheduleMessage",
        "chat.scheduledMessages.list",
        "chat.unfurl",
        "chat.update",
        "conversations.archive",
        "conversations.close",
        "conversations.create",
        "conversations.info",
        "conversations.invite",
        "conversations.join",
        "conversations.kick",
        "conversations.leave",
        "conversations.mark",
        "conversations.open",
        "conversations.rename",
        "conversations.setPurpose",
        "conversations.setTopic",
        "conversations.unarchive",
        "dialog.open",
        "dnd.info",
        "emoji.list",
        "files.delete",
        "files.upload",
        "groups.history",
        "groups.info",
        "im.history",
        "im.open",
        "mpim.history",
        "mpim.open",
        "pins.add",
        "pins.list",
        "pins.remove",
        "reactions.add",
        "reactions.get",
        "reactions.remove",
        "reminders.add",
        "reminders.delete",
        "reminders.info",
        "reminders.list",
        "search.all",
        "search.files",
        "search.messages",
        "team.info",
        "usergroups.create",
        "usergroups.list",
        "usergroups.users.list",
        "usergroups.users.update",
        "users.getPresence",
        "users.info",
        "users.lookupByEmail",
        "users.profile.get",
        "users.profile.set",
        "views.open",
        "views.publish",
        "views.push",
        "views.update",
    ),
)

CURSOR_PAGINATION_ENABLED_METHODS: FrozenSet[str] = frozenset(
    name for name, spec in METHODS.items() if spec.cursor_paginated
)

CONVERSATIONS_API_NOTICE = (
    "{method} is deprecated. Please use the Conversations API instead. For more info, go to "
    "https://api.slack.com/changelog/2020-01-deprecating-antecedents-to-the-conversations-api"
)
GENERIC_NOTICE = "{method} is deprecated. Please check on https://api.slack.com/methods for an alternative."

DEPRECATED_PREFIXES: Tuple[Tuple[str, str], ...] = (
    ("channels.", CONVERSATIONS_API_NOTICE),
    ("groups.", CONVERSATIONS_API_NOTICE),
    ("im.", CONVERSATIONS_API_NOTICE),
    ("mpim.", CONVERSATIONS_API_NOTICE),
    ("admin.conversations.whitelist.", GENERIC_NOTICE),
)


def endpoint_path(method: str) -> str:
    spec = METHODS.get(method)
    return spec.path if spec is not None else method


def is_cursor_paginated(method: str) -> bool:
    return method in CURSOR_PAGINATION_ENABLED_METHODS


def deprecation_notice(method: str) -> Optional[str]:
    """Warning text for a deprecated method, picked by the longest matching prefix."""
    matches = [(prefix, notice) for prefix, notice in DEPRECATED_PREFIXES if method.startswith(prefix)]
    if not matches:
        return None
    _, notice = max(matches, key=lambda item: len(item[0]))
    return notice.format(method=method)


__all__ = [
    "MethodSpec",
    "METHODS",
    "CURSOR_PAGINATION_ENABLED_METHODS",
    "DEPRECATED_PREFIXES",
    "endpoint_path",
    "is_cursor_paginated",
    "deprecation_notice",
]
