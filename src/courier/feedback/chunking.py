"""Split feedback text into embed-sized units.

Discord caps an embed description at a few thousand characters.  Feedback
is collapsed further, into units of roughly :data:`DEFAULT_CHUNK_THRESHOLD`
characters, so long output reads as a sequence of compact embeds.

Splitting happens only between words.  A single word longer than the
threshold is kept whole, so one unit can run past the threshold by up to
the length of that word; the platform limit still leaves room for it.
"""

from __future__ import annotations

import discord

DEFAULT_CHUNK_THRESHOLD: int = 1024
"""Nominal maximum length of a single feedback unit."""


def mention(target: int) -> str:
    """Return the user mention markup for *target*."""
    return f"<@{target}>"


def create_feedback_embed(
    target: int | None,
    colour: discord.Colour,
    contents: str,
) -> discord.Embed:
    """Build a single feedback embed, prefixed with a mention if *target* is set."""
    if target is None:
        return discord.Embed(colour=colour, description=contents)
    return discord.Embed(colour=colour, description=f"{mention(target)} | {contents}")


def chunk_content(
    contents: str,
    threshold: int = DEFAULT_CHUNK_THRESHOLD,
) -> list[str]:
    """Split *contents* into trimmed units of about *threshold* characters.

    Text shorter than the threshold comes back as one trimmed unit.  Longer
    text is split on spaces and the words are packed greedily: a unit is
    closed as soon as it reaches the threshold, at the next word boundary.

    Args:
        contents: The full message text.
        threshold: Nominal unit length.

    Returns:
        The units in reading order.  Never empty.
    """
    if len(contents) < threshold:
        return [contents.strip()]

    units: list[str] = []
    buffer: list[str] = []
    length = 0
    for word in contents.split(" "):
        if length >= threshold:
            units.append("".join(buffer).strip())
            buffer.clear()
            length = 0

        buffer.append(word)
        buffer.append(" ")
        length += len(word) + 1

    if length > 0:
        units.append("".join(buffer).strip())

    return units


def create_content_chunks(
    target: int | None,
    colour: discord.Colour,
    contents: str,
    threshold: int = DEFAULT_CHUNK_THRESHOLD,
) -> list[discord.Embed]:
    """Chunk *contents* and wrap every unit in a feedback embed."""
    return [
        create_feedback_embed(target, colour, unit)
        for unit in chunk_content(contents, threshold)
    ]
