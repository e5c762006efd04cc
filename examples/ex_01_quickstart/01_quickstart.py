"""Quickstart: named factories wired by parameter name.

Register a few factories, declare which of their parameters come from the
container, and leave the rest as placeholders supplied at resolve time.
"""

from __future__ import annotations

from factory_di import INFER, Container, declare


@declare(filename=__file__)
class Cat:
    def speak(self) -> str:
        return "meow"


@declare(filename=__file__)
class Dog:
    def speak(self) -> str:
        return "bark"


class Pig:
    def speak(self) -> str:
        return "oink"


@declare(inject=INFER, placeholders=["pig?"], filename=__file__)
class Trainer:
    def __init__(self, cat: Cat, dog: Dog, pig: Pig | None = None) -> None:
        self.cat = cat
        self.dog = dog
        self.pig = pig

    def speak_all(self) -> str:
        pig = self.pig.speak() if self.pig else "*silence*"
        return f"cat={self.cat.speak()} dog={self.dog.speak()} pig={pig}"


def main() -> None:
    container = Container(register_source=__file__)
    container.register("cat", Cat)
    container.register("dog", Dog)
    container.register("trainer", Trainer)

    urban_trainer = container.resolve("trainer")
    farm_trainer = container.resolve("trainer", {"trainer": {"pig": Pig()}})

    print(f"urban: {urban_trainer.speak_all()}")  # => urban: cat=meow dog=bark pig=*silence*
    print(f"farm: {farm_trainer.speak_all()}")  # => farm: cat=meow dog=bark pig=oink


if __name__ == "__main__":
    main()
