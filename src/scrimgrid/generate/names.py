PLAYER_TAGS = [
    "Alice",
    "Bob",
    "Kestrel",
    "Nova",
    "Rook",
    "Vex",
    "Juno",
    "Onyx",
    "Pixel",
    "Talon",
    "Wisp",
    "Ember",
    "Quill",
    "Raze",
    "Sable",
    "Echo",
    "Flint",
    "Halo",
    "Ivy",
    "Jolt",
    "Lark",
    "Mako",
    "Nyx",
    "Orbit",
    "Pike",
    "Rune",
    "Sprout",
    "Thorn",
    "Umbra",
    "Volt",
]
