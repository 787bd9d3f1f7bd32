"""Demo family tree for development and previews."""

from models import FamilyMember, FamilyTreeData, Pet


def generate_demo_family_tree() -> FamilyTreeData:
    """
    Four generations: two great-grandparent couples whose children (James and
    Dorothy) marry across branches, their two children's families, and four pets.
    """
    members = (
        # Generation 0 - great-grandparents
        FamilyMember("gg1", "William", "Anderson", 0, birth_year=1920, death_year=1995,
                     has_memorial=True, memorial_id="mem-gg1", spouse_id="gg2", child_ids=("g1",)),
        FamilyMember("gg2", "Margaret", "Anderson", 0, nickname="Maggie", birth_year=1924, death_year=2001,
                     has_memorial=True, memorial_id="mem-gg2", spouse_id="gg1", child_ids=("g1",)),
        FamilyMember("gg3", "Robert", "Thompson", 0, birth_year=1918, death_year=1988,
                     has_memorial=True, memorial_id="mem-gg3", spouse_id="gg4", child_ids=("g2",)),
        FamilyMember("gg4", "Eleanor", "Thompson", 0, birth_year=1922, death_year=2010,
                     has_memorial=True, memorial_id="mem-gg4", spouse_id="gg3", child_ids=("g2",)),
        # Generation 1 - grandparents
        FamilyMember("g1", "James", "Anderson", 1, birth_year=1945, death_year=2020,
                     has_memorial=True, memorial_id="mem-g1", parent_ids=("gg1", "gg2"), spouse_id="g2",
                     child_ids=("p1", "p2"), pet_ids=("pet1",)),
        FamilyMember("g2", "Dorothy", "Anderson", 1, nickname="Dotty", birth_year=1948, death_year=2022,
                     has_memorial=True, memorial_id="mem-g2", parent_ids=("gg3", "gg4"), spouse_id="g1",
                     child_ids=("p1", "p2")),
        # Generation 2 - parents
        FamilyMember("p1", "Michael", "Anderson", 2, birth_year=1970, parent_ids=("g1", "g2"),
                     spouse_id="p1s", child_ids=("c1", "c2"), pet_ids=("pet2", "pet3")),
        FamilyMember("p1s", "Sarah", "Anderson", 2, birth_year=1972, spouse_id="p1", child_ids=("c1", "c2")),
        FamilyMember("p2", "Elizabeth", "Martinez", 2, nickname="Beth", birth_year=1973,
                     parent_ids=("g1", "g2"), spouse_id="p2s", child_ids=("c3",)),
        FamilyMember("p2s", "Carlos", "Martinez", 2, birth_year=1971, spouse_id="p2", child_ids=("c3",)),
        # Generation 3 - children
        FamilyMember("c1", "Emma", "Anderson", 3, birth_year=1998, parent_ids=("p1", "p1s")),
        FamilyMember("c2", "Noah", "Anderson", 3, birth_year=2001, parent_ids=("p1", "p1s")),
        FamilyMember("c3", "Sofia", "Martinez", 3, birth_year=2000, parent_ids=("p2", "p2s"), pet_ids=("pet4",)),
    )

    pets = (
        Pet("pet1", "Max", "dog", "g1", birth_year=2005, death_year=2018, has_memorial=True, memorial_id="mem-pet1"),
        Pet("pet2", "Whiskers", "cat", "p1", birth_year=2015, death_year=2023, has_memorial=True,
            memorial_id="mem-pet2"),
        Pet("pet3", "Buddy", "dog", "p1", birth_year=2018),
        Pet("pet4", "Luna", "cat", "c3", birth_year=2020),
    )

    return FamilyTreeData(members=members, pets=pets, root_member_ids=("gg1", "gg2", "gg3", "gg4"))
