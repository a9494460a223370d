def compact_order(items, order_field="position"):
    """
    Re-assigns sequential order values (0..N-1) following list order.
    """
    for index, item in enumerate(items):
        setattr(item, order_field, index)

    return items
