"""
Static help pages. {name} is the only substitution: the command name users type.
"""

from __future__ import annotations

import re
from typing import Optional

_GROUPS_TOPIC = re.compile(r"groups?")

HELP_MESSAGE = """\
{name} randomizes the order of options in a list.
*Example:* {name} one two three
&gt; I randomized and got: *two*, *three*, *one*.
Only need a few? Use */n* to pick that many options.
*Example:* {name} /n 2 one two three
&gt; I randomized and got: *three*, *one*.
If you use a set of options a lot, try saving them as a *group* in the current channel or DM! Type "{name} /help groups" to learn more.
Note that the selection is weighted. An option is more likely to come first if it is given multiple times."""

GROUPS_HELP_MESSAGE = """\
{name} lets you save *groups* in the current channel or DM.
*Save a group:* {name} /save snacks chips pretzels trailmix
*Use a group:* {name} +snacks
*List your current channel's groups:* {name} /list
*Show the options in a group:* {name} /show snacks
*Delete a group:* {name} /delete snacks
Use *+* to include a group in your choices, and *-* to remove an option from this round (without removing it from the group).
*Example:* {name} +snacks -pretzels cereal
&gt; I randomized and got: *cereal*, *trailmix*, *chips*.
(See "{name} /help" for the basics.)"""


def help_message(name: str, topic: Optional[str] = None) -> str:
    """Main help page, or the groups page when topic mentions groups."""
    template = HELP_MESSAGE
    if topic and _GROUPS_TOPIC.search(topic):
        template = GROUPS_HELP_MESSAGE
    return template.format(name=name)
