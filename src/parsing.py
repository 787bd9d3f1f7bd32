"""Loading family tree data from JSON documents and GEDCOM files."""

from dataclasses import replace
import json
import logging
from pathlib import Path
import re

from ged4py import GedcomReader

from errors import InvalidTreeDataError
from graph import assign_generations, build_graph
from models import FamilyMember, FamilyTreeData, Pet

logger = logging.getLogger(__name__)

PET_SPECIES = ("dog", "cat", "bird", "horse", "other")


# ============================================================================
# JSON
# ============================================================================


def _require(obj: dict, key: str, kind, where: str):
    if key not in obj:
        raise InvalidTreeDataError(f"{where}: missing required field {key!r}")
    value = obj[key]
    if isinstance(value, bool) and kind is not bool:
        raise InvalidTreeDataError(f"{where}: {key!r} must be {kind.__name__}, got bool")
    if not isinstance(value, kind):
        raise InvalidTreeDataError(f"{where}: {key!r} must be {kind.__name__}, got {type(value).__name__}")
    return value


def _optional(obj: dict, key: str, kind, where: str):
    if obj.get(key) is None:
        return None
    return _require(obj, key, kind, where)


def _id_list(obj: dict, key: str, where: str) -> tuple[str, ...]:
    values = obj.get(key) or []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise InvalidTreeDataError(f"{where}: {key!r} must be a list of strings")
    return tuple(values)


def member_from_dict(obj: dict) -> FamilyMember:
    if not isinstance(obj, dict):
        raise InvalidTreeDataError(f"Member must be an object, got {type(obj).__name__}")
    member_id = _require(obj, "id", str, "member")
    where = f"member {member_id!r}"
    return FamilyMember(
        id=member_id,
        first_name=_require(obj, "firstName", str, where),
        last_name=obj.get("lastName") or "",
        nickname=_optional(obj, "nickname", str, where),
        birth_year=_optional(obj, "birthYear", int, where),
        death_year=_optional(obj, "deathYear", int, where),
        generation=_require(obj, "generation", int, where),
        spouse_id=_optional(obj, "spouseId", str, where),
        parent_ids=_id_list(obj, "parentIds", where),
        child_ids=_id_list(obj, "childIds", where),
        pet_ids=_id_list(obj, "petIds", where),
        has_memorial=bool(obj.get("hasMemorial", False)),
        memorial_id=_optional(obj, "memorialId", str, where),
    )


def pet_from_dict(obj: dict) -> Pet:
    if not isinstance(obj, dict):
        raise InvalidTreeDataError(f"Pet must be an object, got {type(obj).__name__}")
    pet_id = _require(obj, "id", str, "pet")
    where = f"pet {pet_id!r}"
    species = obj.get("species") or "other"
    if species not in PET_SPECIES:
        logger.warning("%s: unknown species %r, using 'other'", where, species)
        species = "other"
    return Pet(
        id=pet_id,
        name=_require(obj, "name", str, where),
        species=species,
        owner_id=_require(obj, "ownerId", str, where),
        birth_year=_optional(obj, "birthYear", int, where),
        death_year=_optional(obj, "deathYear", int, where),
        has_memorial=bool(obj.get("hasMemorial", False)),
        memorial_id=_optional(obj, "memorialId", str, where),
    )


def tree_data_from_dict(obj: dict) -> FamilyTreeData:
    """Convert a `{members, pets, rootMemberIds}` document into FamilyTreeData."""
    if not isinstance(obj, dict):
        raise InvalidTreeDataError(f"Tree data must be an object, got {type(obj).__name__}")
    members = obj.get("members") or []
    pets = obj.get("pets") or []
    if not isinstance(members, list) or not isinstance(pets, list):
        raise InvalidTreeDataError("'members' and 'pets' must be lists")
    return FamilyTreeData(
        members=tuple(member_from_dict(m) for m in members),
        pets=tuple(pet_from_dict(p) for p in pets),
        root_member_ids=_id_list(obj, "rootMemberIds", "tree"),
    )


def load_tree_json(path: Path) -> FamilyTreeData:
    """Read a JSON tree document from disk."""
    with open(path, encoding="utf-8") as f:
        return tree_data_from_dict(json.load(f))


# ============================================================================
# GEDCOM
# ============================================================================


def normalize_xref(xref_id: str) -> str:
    """Strip the @ delimiters from a GEDCOM xref like '@I12@'."""
    return xref_id.strip().strip("@")


def parse_year(date_str: str | None) -> int | None:
    """
    Pull the year out of a GEDCOM date string.

    Handles formats like "25 NOV 1954", "ABT 1905", "(05/15/1923)",
    "BET 1900 AND 1910" (first year wins) and "1839-08-29".
    Returns None if no four-digit year is present.
    """
    if not date_str:
        return None
    match = re.search(r"(?<!\d)(\d{4})(?!\d)", date_str)
    if not match:
        return None
    return int(match.group(1))


def parse_gedcom(filepath: Path) -> GedcomReader:
    """Parse a GEDCOM file and return the reader object."""
    return GedcomReader(str(filepath))


def extract_name_parts(indi) -> tuple[str, str]:
    """Extract given name and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ("Unknown", "")

    name_value = name_rec.value
    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_value, tuple):
        given, surname = name_value[0], name_value[1]
        return (given or "Unknown", surname or "")

    # Fallback: string format "Given /Surname/"
    match = re.match(r"^([^/]*)/([^/]*)/", str(name_value))
    if match:
        return (match.group(1).strip() or "Unknown", match.group(2).strip())
    return (str(name_value).strip() or "Unknown", "")


def extract_event_date(indi, tag: str) -> str | None:
    """Date of an event tag (BIRT, DEAT, ...) as a string."""
    event = indi.sub_tag(tag)
    if event is None:
        return None
    date_rec = event.sub_tag("DATE")
    if date_rec and date_rec.value:
        # ged4py may return DateValue objects
        return str(date_rec.value)
    return None


def normalize_gedcom(reader: GedcomReader) -> FamilyTreeData:
    """
    Build tree data from a parsed GEDCOM file.

    Individuals become members; FAM records supply spouse and parent links.
    GEDCOM has no notion of generation, so it is derived from the parent
    links: the oldest ancestors are generation 0 and spouses who married in
    share their partner's generation. When a person appears in several
    families the first one names their spouse.
    """
    people: dict[str, dict] = {}
    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue
        person_id = normalize_xref(rec.xref_id)
        first_name, last_name = extract_name_parts(rec)
        people[person_id] = {
            "first_name": first_name,
            "last_name": last_name,
            "birth_year": parse_year(extract_event_date(rec, "BIRT")),
            "death_year": parse_year(extract_event_date(rec, "DEAT")),
            "spouse_id": None,
            "parent_ids": [],
            "child_ids": [],
        }

    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue
        husb = rec.sub_tag("HUSB")
        wife = rec.sub_tag("WIFE")
        partners = [normalize_xref(p.xref_id) for p in (husb, wife) if p is not None and p.xref_id]
        partners = [p for p in partners if p in people]

        if len(partners) == 2:
            a, b = partners
            if people[a]["spouse_id"] is None and people[b]["spouse_id"] is None:
                people[a]["spouse_id"] = b
                people[b]["spouse_id"] = a

        for child in rec.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            child_id = normalize_xref(child.xref_id)
            if child_id not in people:
                continue
            for parent_id in partners:
                if parent_id not in people[child_id]["parent_ids"] and len(people[child_id]["parent_ids"]) < 2:
                    people[child_id]["parent_ids"].append(parent_id)
                    people[parent_id]["child_ids"].append(child_id)

    members = tuple(
        FamilyMember(
            id=person_id,
            first_name=p["first_name"],
            last_name=p["last_name"],
            generation=0,
            birth_year=p["birth_year"],
            death_year=p["death_year"],
            spouse_id=p["spouse_id"],
            parent_ids=tuple(p["parent_ids"]),
            child_ids=tuple(p["child_ids"]),
        )
        for person_id, p in people.items()
    )

    generations, issues = assign_generations(build_graph(FamilyTreeData(members=members)))
    for issue in issues:
        logger.warning("%s", issue.message)

    members = tuple(replace(m, generation=generations.get(m.id, 0)) for m in members)
    roots = tuple(m.id for m in members if m.generation == 0)
    logger.info("Imported %d people from GEDCOM", len(members))
    return FamilyTreeData(members=members, pets=(), root_member_ids=roots)


def load_gedcom(filepath: Path) -> FamilyTreeData:
    return normalize_gedcom(parse_gedcom(filepath))
