LBS_PER_KG = 2.20462


def kg_to_lb(kg: float) -> float:
    """
    Convert kilograms to pounds.

    This function performs a pure mathematical conversion.
    It does not round or format the result.
    """
    return kg * LBS_PER_KG


def lb_to_kg(lb: float) -> float:
    """
    Convert pounds to kilograms.

    This function performs a pure mathematical conversion.
    It does not round or format the result.
    """
    return lb / LBS_PER_KG
