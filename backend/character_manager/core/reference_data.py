# --- 기준 데이터 (Reference Data) ---
# Fixed lookup rows seeded into the database on startup. Ids are stable and
# referenced by characters, so rows are never renumbered.

FACTION_TYPES = {
    1: "Light Side",
    2: "Dark Side",
}

RACE_TYPES = {
    1: "Human",
    2: "Dwarf",
    3: "Elf",
    4: "Orc",
    5: "Zombie",
    6: "Alien",
}

CLASS_TYPES = {
    1: "Warrior",
    2: "Archer",
    3: "Wizard",
    4: "Ninja",
    5: "Medic",
    6: "Paladin",
}

# id: (name, type)
REALMS = {
    1: ("Frostgard", "Neutral"),
    2: ("Barren Land", "Neutral"),
    3: ("Wraithwind", "PVP"),
    4: ("Amber Expanse", "Neutral"),
    5: ("Boiling Isle", "PVP"),
}

# (faction_id, race_id) -> allowed class ids
_ALLOWED_CLASSES = {
    (1, 1): (1, 2, 3, 4, 5, 6),  # Human
    (1, 2): (1, 2, 5, 6),        # Dwarf
    (1, 3): (2, 3, 4, 5),        # Elf
    (2, 4): (1, 2, 4),           # Orc
    (2, 5): (1, 2, 3, 4, 5),     # Zombie
    (2, 6): (1, 2, 3, 4, 5, 6),  # Alien
}

# (faction_id, race_id, class_id), in mapping id order starting at 1
CHARACTER_MAPPINGS = [
    (faction_id, race_id, class_id)
    for (faction_id, race_id), class_ids in _ALLOWED_CLASSES.items()
    for class_id in class_ids
]
