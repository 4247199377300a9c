"""Discord bot commands for the Courier demo bot.

- :mod:`courier.commands.feedback` -- ``!say``, ``!dm``, ``/say``
"""

COMMAND_EXTENSIONS: list[str] = [
    "courier.commands.feedback",
]
