from __future__ import annotations

import random

FIRST_NAMES = (
    "Yuzuru", "Shoma", "Kaori", "Mai", "Rika", "Kazuki", "Sota", "Hana",
    "Alexei", "Evgenia", "Anna", "Mikhail", "Kamila", "Daria", "Pavel", "Sofia",
    "Nathan", "Jason", "Alysa", "Isabeau", "Ilia", "Bradie", "Vincent", "Amber",
    "Boyang", "Han", "Zijun", "Xiangning", "Minjun", "Yuna", "Jiwon", "Seoyeon",
    "Deniss", "Matteo", "Lucas", "Kevin", "Adam", "Loena", "Nina", "Eva",
)

LAST_NAMES = (
    "Hanyu", "Uno", "Sakamoto", "Kagiyama", "Higuchi", "Miura", "Tomono", "Kihira",
    "Volkov", "Medvedeva", "Shcherbakova", "Kolyada", "Valieva", "Petrova", "Sokolov", "Orlova",
    "Chen", "Brown", "Liu", "Levito", "Malinin", "Tennell", "Zhou", "Glenn",
    "Jin", "Yan", "Li", "Zhu", "Cha", "Kim", "Lee", "Shin",
    "Vasiljevs", "Rizzo", "Moreau", "Aymoz", "Siao", "Hendrickx", "Pinzarrone", "Schott",
)


def generate_name(rng: random.Random) -> str:
    """Return a random ``First Last`` display name drawn with ``rng``."""

    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


__all__ = ["generate_name", "FIRST_NAMES", "LAST_NAMES"]
