"""
Controller event names.
"""


class ControllerEvent:
    """Events passed between the controller's components."""

    AUTHENTICATED = "session:authenticated"
    RESET = "session:reset"
    WRITE_CONFIRMED = "write:confirmed"
    REFRESHED = "views:refreshed"
    SEARCHED = "search:applied"
    STATE_CHANGED = "state:changed"


class RemoteMethod:
    """Contract method names on the remote store."""

    GET_STATUS = "get_status"
    GET_STATUS_HISTORY = "get_status_history"
    GET_PUBLIC_FEED = "get_public_feed"
    SEARCH_STATUSES = "search_statuses"
    SET_STATUS = "set_status"
    DELETE_STATUS = "delete_status"

    VIEWS = (GET_STATUS, GET_STATUS_HISTORY, GET_PUBLIC_FEED, SEARCH_STATUSES)
    CHANGES = (SET_STATUS, DELETE_STATUS)
