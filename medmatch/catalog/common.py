"""Built-in table of common medications for lookup and autocomplete."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final
from uuid import UUID

from medmatch.core.models import MedicationMetadata, MedicationRecord


class MedicationCategory(str, Enum):
    PAIN_RELIEF = "Pain Relief"
    ANTIBIOTIC = "Antibiotic"
    VITAMIN = "Vitamin"
    HEART_HEALTH = "Heart Health"
    DIABETES = "Diabetes"
    MENTAL_HEALTH = "Mental Health"
    ALLERGY = "Allergy"
    OTHER = "Other"


@dataclass(slots=True, frozen=True)
class CommonMedication:
    name: str
    generic_name: str | None
    brand_names: tuple[str, ...]
    active_ingredient: str
    common_dosages: tuple[str, ...]
    category: MedicationCategory

    def names(self) -> list[str]:
        values = [self.name]
        if self.generic_name:
            values.append(self.generic_name)
        values.extend(self.brand_names)
        return values

    def to_record(self, record_id: str | UUID, dosage: str | None = None) -> MedicationRecord:
        """Seed a store record from this entry."""
        return MedicationRecord(
            id=record_id,
            name=self.name,
            metadata=MedicationMetadata(
                generic_name=self.generic_name,
                brand_names=self.brand_names,
                active_ingredient=self.active_ingredient,
                dosage_amount=dosage,
            ),
        )


COMMON_MEDICATIONS: Final[tuple[CommonMedication, ...]] = (
    CommonMedication(
        name="Aspirin",
        generic_name="Acetylsalicylic Acid",
        brand_names=("Bayer", "Bufferin", "Ecotrin"),
        active_ingredient="Aspirin",
        common_dosages=("81mg", "325mg", "500mg"),
        category=MedicationCategory.PAIN_RELIEF,
    ),
    CommonMedication(
        name="Ibuprofen",
        generic_name=None,
        brand_names=("Advil", "Motrin", "Nurofen"),
        active_ingredient="Ibuprofen",
        common_dosages=("200mg", "400mg", "600mg", "800mg"),
        category=MedicationCategory.PAIN_RELIEF,
    ),
    CommonMedication(
        name="Acetaminophen",
        generic_name=None,
        brand_names=("Tylenol", "Paracetamol"),
        active_ingredient="Acetaminophen",
        common_dosages=("325mg", "500mg", "650mg"),
        category=MedicationCategory.PAIN_RELIEF,
    ),
    CommonMedication(
        name="Vitamin D",
        generic_name="Cholecalciferol",
        brand_names=("Vitamin D3",),
        active_ingredient="Vitamin D3",
        common_dosages=("1000 IU", "2000 IU", "5000 IU"),
        category=MedicationCategory.VITAMIN,
    ),
    CommonMedication(
        name="Multivitamin",
        generic_name=None,
        brand_names=("Centrum", "One A Day", "Nature Made"),
        active_ingredient="Mixed vitamins",
        common_dosages=("Daily",),
        category=MedicationCategory.VITAMIN,
    ),
    CommonMedication(
        name="Fish Oil",
        generic_name="Omega-3 Fatty Acids",
        brand_names=("Nordic Naturals", "Nature Made"),
        active_ingredient="EPA/DHA",
        common_dosages=("1000mg", "1200mg"),
        category=MedicationCategory.VITAMIN,
    ),
    CommonMedication(
        name="Amoxicillin",
        generic_name=None,
        brand_names=("Amoxil", "Moxatag"),
        active_ingredient="Amoxicillin",
        common_dosages=("250mg", "500mg", "875mg"),
        category=MedicationCategory.ANTIBIOTIC,
    ),
    CommonMedication(
        name="Cetirizine",
        generic_name=None,
        brand_names=("Zyrtec", "Alleroff"),
        active_ingredient="Cetirizine",
        common_dosages=("5mg", "10mg"),
        category=MedicationCategory.ALLERGY,
    ),
    CommonMedication(
        name="Loratadine",
        generic_name=None,
        brand_names=("Claritin", "Alavert"),
        active_ingredient="Loratadine",
        common_dosages=("10mg",),
        category=MedicationCategory.ALLERGY,
    ),
)


def find_common_medication(term: str | None) -> CommonMedication | None:
    """First entry whose name, generic name, brand or ingredient contains ``term``."""
    needle = (term or "").strip().lower()
    if not needle:
        return None
    for medication in COMMON_MEDICATIONS:
        haystack = medication.names() + [medication.active_ingredient]
        if any(needle in value.lower() for value in haystack):
            return medication
    return None


def suggest_medications(term: str | None, limit: int = 5) -> list[CommonMedication]:
    """Entries with a name, generic name or brand starting with ``term``, in table order."""
    prefix = (term or "").strip().lower()
    if not prefix or limit <= 0:
        return []
    matches = [
        medication
        for medication in COMMON_MEDICATIONS
        if any(value.lower().startswith(prefix) for value in medication.names())
    ]
    return matches[:limit]
