"""이벤트 유형 상수"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # pet lifecycle
    PET_CREATED = "pet_created"
    PET_UPDATED = "pet_updated"
    PET_DELETED = "pet_deleted"

    # shop / inventory
    ITEM_PURCHASED = "item_purchased"
    ITEM_USED = "item_used"

    # scheduler
    TICK_COMPLETED = "tick_completed"
