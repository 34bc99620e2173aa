HUMAN_SUBJECT = "Human"

MAX_CAREERS = 4
SURPRISE_COUNT = 3

SUGGESTED_CAREERS: tuple[str, ...] = (
    # real
    "Astronaut",
    "Chef",
    "Detective",
    "Gardener",
    "CEO",
    "Artist",
    "Doctor",
    "Pilot",
    "Firefighter",
    "Scientist",
    "Architect",
    "Musician",
    "Professional Athlete",
    "Marine Biologist",
    "Archaeologist",
    "Software Engineer",
    "Veterinarian",
    "Fashion Designer",
    "Park Ranger",
    "Chemical Engineer",
    "Product Manager",
    # fictional / satirical
    "Superhero",
    "Wizard",
    "Time Traveler",
    "Dragon Tamer",
    "Space Ranger",
    "Cat Whisperer",
    "Ghost Hunter",
    "Ninja",
    "Pirate",
    "Zombie Apocalypse Survivor",
    "Stunt Artist",
)


def is_human_subject(subject_descriptor: str | None) -> bool:
    return (subject_descriptor or HUMAN_SUBJECT) == HUMAN_SUBJECT
