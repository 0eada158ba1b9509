"""Map recognized labels back to a configured Action."""

from speechlauncher.core.config import Action, LauncherConfig
from speechlauncher.core.errors import UnknownAction, UnknownTopic


def resolve(config: LauncherConfig, topic_label: str, action_label: str) -> Action:
    """Find the action named *action_label* inside the object *topic_label*.

    The object is looked up first and the action only within it. Because
    the grammar's action vocabulary is global, a real action name heard
    under the wrong object raises UnknownAction.
    """
    topic = next((t for t in config.topics if t.name == topic_label), None)
    if topic is None:
        raise UnknownTopic(topic_label, action_label)

    action = next((a for a in topic.actions if a.name == action_label), None)
    if action is None:
        raise UnknownAction(topic_label, action_label)
    return action
