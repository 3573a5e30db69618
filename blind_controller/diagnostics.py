from typing import Any

from .dispatcher import BlindControllerDispatcher
from .util import to_json_safe_dict


def get_dispatcher_diagnostics(dispatcher: BlindControllerDispatcher) -> dict[str, Any]:
    return {
        "title": "Blind Controller",
        "sun_position": to_json_safe_dict(dispatcher.sun_position) if dispatcher.sun_position else None,
        "weather": to_json_safe_dict(dispatcher.weather) if dispatcher.weather else None,
        "under_manual_control": dispatcher.blinds_under_manual_control(),
        "blinds": {
            str(channel): {
                "config": to_json_safe_dict(dispatcher.get_config(channel)),
                "state": to_json_safe_dict(dispatcher.get_state(channel)),
            }
            for channel in dispatcher.channels()
        },
    }
