WELCOME = [
    "Welcome to The Coder's Dungeon!",
    "Enter a GitHub repository URL to begin your adventure (e.g., facebook/react):",
]

CLEARED = '✨ The mystical console has been cleared. Type "help" to consult your spellbook.'

FAREWELL = "🚪 You step through the portal and leave the dungeon. Enter a new repository to begin another adventure."

UNKNOWN_COMMAND = 'Unknown command. Type "help" for a list of commands.'

NO_BREADCRUMBS = "🏛️ You are already at the entrance of the dungeon. There is nowhere to go back to."

COMPASS = ("north", "south", "east", "west", "up", "down")

ROOM_DESCRIPTIONS = [
    "🏛️ You step into the {name} chamber. The walls are lined with ancient scrolls and magical artifacts.",
    "🌌 You enter the {name} realm. Mystical energies pulse through the air.",
    "🏰 You cross the threshold into {name}. This chamber holds secrets yet to be discovered.",
    "⚡ You venture into the {name} sanctum. Arcane symbols glow faintly on the walls.",
    "🔮 You find yourself in the {name} library. Knowledge awaits those who seek it.",
]

BACK_DESCRIPTIONS = [
    "🔄 You retrace your steps through the mystical corridors.",
    "🏛️ You return to the previous chamber, the familiar arcane energies welcome you back.",
    "🧭 You navigate back through the dungeon's winding passages.",
    "⚡ You step back through the portal to the previous realm.",
    "🔮 You find yourself back in the familiar chamber you visited before.",
]

HELP = [
    "📚 Your Arcane Spellbook - Available Commands:",
    "",
    "🧭 go [chamber] - Venture into a new chamber (directory)",
    "🔄 back - Return to the previous chamber you visited",
    "🔍 examine [artifact] - Study a magical artifact (file)",
    "📖 read [scroll] - Decipher the runes of an artifact (file contents)",
    "🎒 inventory - Check your magical satchel",
    "🗺️ structure/map - Unfurl the dungeon map (repo structure)",
    "❓ help - Consult your spellbook",
    "✨ clear - Clear the mystical console",
    "🚪 exit - Leave the current dungeon",
    "",
    '💡 Tip: Use "back" to retrace your steps through the dungeon!',
]


def entered_repo(repo: str) -> list[str]:
    return [
        f"🏰 You have entered the mystical repository: {repo}",
        "The air hums with arcane energy. Ancient code artifacts await your discovery.",
        'Type "go [directory]" to explore chambers, "examine [file]" to inspect artifacts, or "help" for your spellbook.',
    ]
