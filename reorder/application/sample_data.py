"""Sample spare parts used by `manage.py seed` and the tests."""

from reorder.core.entities.part import SparePart

# (name, current_stock, reorder_point, supplier_lead_time, cost)
SAMPLE_PARTS: tuple[tuple[str, int, int, int, float], ...] = (
    ("Hydraulic Pump Seal", 2, 5, 7, 45.99),
    ("Bearing Assembly", 12, 10, 14, 125.50),
    ("Conveyor Belt", 0, 3, 21, 350.00),
    ("Motor Brush Set", 8, 15, 5, 28.75),
    ("Control Valve", 1, 4, 10, 89.99),
    ("Gasket Kit", 20, 12, 3, 15.25),
    ("Steel Cable", 5, 8, 14, 67.50),
    ("Circuit Board", 0, 2, 30, 450.00),
)


def generate_sample_parts() -> list[SparePart]:
    """The eight sample parts with ids "1" to "8"."""
    return [
        SparePart(
            id=str(index),
            name=name,
            current_stock=current_stock,
            reorder_point=reorder_point,
            supplier_lead_time=lead_time,
            cost=cost,
        )
        for index, (name, current_stock, reorder_point, lead_time, cost) in enumerate(
            SAMPLE_PARTS, start=1
        )
    ]
