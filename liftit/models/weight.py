from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from liftit.models.errors import InvalidArgumentError, require_not_none
from liftit.utils.units import kg_to_lb, lb_to_kg


class WeightUnit(str, Enum):
    LBS = "LBS"
    KG = "KG"


class Weight(BaseModel):
    """
    Immutable weight measurement.

    Conversion between units uses 1 kg = 2.20462 lbs.
    """

    model_config = ConfigDict(frozen=True)

    value: float = Field(ge=0)
    unit: WeightUnit

    def convert_to(self, target_unit: WeightUnit) -> "Weight":
        """
        Return this weight expressed in target_unit.

        Returns the same instance when no conversion is needed.
        """
        require_not_none(target_unit, "target_unit")
        try:
            target_unit = WeightUnit(target_unit)
        except ValueError as e:
            raise InvalidArgumentError(f"Unknown weight unit: {target_unit}") from e

        if target_unit == self.unit:
            return self

        if target_unit == WeightUnit.KG:
            return Weight(value=lb_to_kg(self.value), unit=WeightUnit.KG)
        return Weight(value=kg_to_lb(self.value), unit=WeightUnit.LBS)
