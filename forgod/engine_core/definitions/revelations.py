"""
Revelation cards - The shared deck of angel and demon goal cards.
"""

from __future__ import annotations

from ..state import Revelation, RevelationReward, RevelationSource, RevelationTrigger


ANGEL = RevelationSource.ANGEL
DEMON = RevelationSource.DEMON
EVENT = RevelationTrigger.EVENT


REVELATIONS: tuple[Revelation, ...] = (
    # Angel
    Revelation(
        id="angel-1",
        name="Prayer of Revelation",
        source=ANGEL,
        task="Offer one monster sacrifice at the temple.",
        reward=RevelationReward(extra_revelations=2),
        sacrifice_cost=1,
    ),
    Revelation(
        id="angel-2",
        name="Circle Offering",
        source=ANGEL,
        task="Offer a sacrifice at the temple.",
        reward=RevelationReward(faith_score=1, extra_revelations=1),
        sacrifice_cost=1,
    ),
    Revelation(
        id="angel-3",
        name="Triangle Offering",
        source=ANGEL,
        task="Offer a sacrifice at the temple.",
        reward=RevelationReward(faith_score=1, extra_revelations=1),
        sacrifice_cost=1,
    ),
    Revelation(
        id="angel-4",
        name="Square Offering",
        source=ANGEL,
        task="Offer a sacrifice at the temple.",
        reward=RevelationReward(faith_score=1, extra_revelations=1),
        sacrifice_cost=1,
    ),
    Revelation(
        id="angel-5",
        name="Strike the Balrog",
        source=ANGEL,
        task="Attack the Balrog.",
        reward=RevelationReward(faith_score=2, extra_revelations=1),
        trigger=EVENT,
    ),
    Revelation(
        id="angel-6",
        name="Slay the Balrog",
        source=ANGEL,
        task="Kill the Balrog while holy.",
        reward=RevelationReward(faith_score=3),
        is_game_end=True,
        trigger=EVENT,
    ),
    Revelation(
        id="angel-7",
        name="Angel's Protection",
        source=ANGEL,
        task="Take a fatal blow from a corrupt hero.",
        reward=RevelationReward(faith_score=2, extra_revelations=1),
        trigger=RevelationTrigger.PROTECTION,
    ),
    Revelation(
        id="angel-8",
        name="Victory of God",
        source=ANGEL,
        task="Offer six sacrifices at the temple.",
        reward=RevelationReward(faith_score=5, extra_revelations=1),
        sacrifice_cost=6,
    ),
    Revelation(
        id="angel-9",
        name="Slay the Demon King",
        source=ANGEL,
        task="Reach 5 faith and enter the castle.",
        reward=RevelationReward(faith_score=5),
        is_game_end=True,
    ),
    # Demon
    Revelation(
        id="demon-1",
        name="Circle Tribute",
        source=DEMON,
        task="Bring a sacrifice to the castle.",
        reward=RevelationReward(devil_score=1, corrupt_score=1, extra_revelations=1),
        sacrifice_cost=1,
    ),
    Revelation(
        id="demon-2",
        name="Triangle Tribute",
        source=DEMON,
        task="Bring a sacrifice to the castle.",
        reward=RevelationReward(devil_score=1, corrupt_score=1, extra_revelations=1),
        sacrifice_cost=1,
    ),
    Revelation(
        id="demon-3",
        name="Square Tribute",
        source=DEMON,
        task="Bring a sacrifice to the castle.",
        reward=RevelationReward(devil_score=1, corrupt_score=1, extra_revelations=1),
        sacrifice_cost=1,
    ),
    Revelation(
        id="demon-4",
        name="First Strike",
        source=DEMON,
        task="Attack another hero while holy.",
        reward=RevelationReward(devil_score=1, corrupt_score=2, extra_revelations=1),
        trigger=EVENT,
    ),
    Revelation(
        id="demon-5",
        name="Growth",
        source=DEMON,
        task="Reach the highest level among all heroes.",
        reward=RevelationReward(devil_score=2, extra_revelations=1),
    ),
    Revelation(
        id="demon-6",
        name="Village Raid",
        source=DEMON,
        task="Attack a hero standing on a village.",
        reward=RevelationReward(devil_score=2, corrupt_score=1, extra_revelations=1),
        trigger=EVENT,
    ),
    Revelation(
        id="demon-7",
        name="Betrayal",
        source=DEMON,
        task="Attack a hero you shared sacrifices with.",
        reward=RevelationReward(devil_score=3, extra_revelations=1),
        trigger=EVENT,
    ),
    Revelation(
        id="demon-8",
        name="Temptation",
        source=DEMON,
        task="Kill another hero while holy.",
        reward=RevelationReward(devil_score=3, corrupt_score=3, extra_revelations=2),
        trigger=EVENT,
    ),
    Revelation(
        id="demon-9",
        name="Proof of Corruption",
        source=DEMON,
        task="Raise your corrupt die to 3 or more.",
        reward=RevelationReward(devil_score=3, extra_revelations=2),
    ),
    Revelation(
        id="demon-10",
        name="Draw the Demon Sword",
        source=DEMON,
        task="Acquire the demon sword.",
        reward=RevelationReward(devil_score=3, corrupt_score=3, extra_revelations=1),
    ),
)

REVELATIONS_BY_ID: dict[str, Revelation] = {r.id: r for r in REVELATIONS}
