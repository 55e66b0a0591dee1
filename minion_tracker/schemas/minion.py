"""
Pydantic models (schemas) for minion stat records.

Used as the store's input/output types and for parsing submitted forms.
No constraints are placed on the values: the only processing is coercion
of form strings into integers, where anything non-numeric becomes 0.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


# Integer columns are 64-bit
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def coerce_int(value: Any) -> int:
    """
    Parse a submitted form value as an integer.

    Missing, blank or non-numeric input is treated as 0. Values outside
    the 64-bit range saturate at its bounds.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        parsed = value
    elif value is None:
        return 0
    else:
        try:
            parsed = int(str(value).strip())
        except ValueError:
            return 0
    return max(INT64_MIN, min(parsed, INT64_MAX))


def coerce_text(value: Any) -> str:
    return "" if value is None else str(value)


FormInt = Annotated[int, BeforeValidator(coerce_int)]
FormText = Annotated[str, BeforeValidator(coerce_text)]


class MinionBase(BaseModel):
    """
    Base schema for a minion's stat block.
    """

    name: str = ""
    hp: int = 0
    max_hp: int = 0
    ac: int = 0
    attack: int = 0
    damage: str = ""
    notes: str = ""


class MinionCreate(MinionBase):
    """
    Schema for creating a minion. The store assigns ``id`` and ``active``.
    """


class MinionRecord(MinionBase):
    """
    Schema for a minion as stored in the database.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    active: bool = True


class MinionCreateForm(BaseModel):
    """
    Fields accepted by the create form. Max HP starts equal to HP.
    """

    name: FormText = ""
    hp: FormInt = 0
    ac: FormInt = 0
    attack: FormInt = 0
    damage: FormText = ""
    notes: FormText = ""

    def to_create(self) -> MinionCreate:
        return MinionCreate(
            name=self.name,
            hp=self.hp,
            max_hp=self.hp,
            ac=self.ac,
            attack=self.attack,
            damage=self.damage,
            notes=self.notes,
        )


class MinionUpdateForm(BaseModel):
    """
    Fields accepted by the edit form. HP is written as given, without clamping.
    """

    name: FormText = ""
    hp: FormInt = 0
    max_hp: FormInt = 0
    ac: FormInt = 0
    attack: FormInt = 0
    damage: FormText = ""
    notes: FormText = ""

    def to_record(self, minion_id: int) -> MinionRecord:
        # Saving the edit form always leaves the minion active
        return MinionRecord(id=minion_id, active=True, **self.model_dump())


class HpAdjustForm(BaseModel):
    """
    Amount submitted by the heal/damage buttons.
    """

    amount: FormInt = 0
