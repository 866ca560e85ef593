EASY = "Easy"
MODERATE = "Moderate"
HARD = "Hard"

DIFFICULTIES = (EASY, MODERATE, HARD)
DEFAULT_DIFFICULTY = EASY

# Each level carries everything from the level below it
DIFFICULTY_ITEMS = {
    EASY: ("Water Bottle", "Map", "Snacks"),
    MODERATE: ("Water Bottle", "Map", "Snacks", "First Aid Kit", "Rain Jacket"),
    HARD: (
        "Water Bottle",
        "Map",
        "Snacks",
        "First Aid Kit",
        "Rain Jacket",
        "Hiking Poles",
        "Extra Layers",
    ),
}
