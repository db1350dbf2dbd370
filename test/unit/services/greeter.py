import abc
from typing import Iterator, List


class Greeter(abc.ABC):
    @abc.abstractmethod
    def greet(self, name: str, *, punctuation: str = "!") -> str:
        """Greet someone."""
        raise NotImplementedError

    @abc.abstractmethod
    def fail(self) -> None:
        raise NotImplementedError


class GreeterError(Exception):
    pass


class EnglishGreeter(Greeter):
    def __init__(self, greeting: str = "Hello", built: "List[str] | None" = None) -> None:
        self.greeting = greeting
        self.mood = "neutral"
        if built is not None:
            built.append(greeting)

    def greet(self, name: str, *, punctuation: str = "!") -> str:
        return f"{self.greeting}, {name}{punctuation}"

    def fail(self) -> None:
        raise GreeterError(self.greeting)


class BrokenGreeter(EnglishGreeter):
    def __init__(self) -> None:
        raise GreeterError("cannot build")


class WordBag:
    def __init__(self, *words: str) -> None:
        self.words = list(words)

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __contains__(self, word: object) -> bool:
        return word in self.words

    def __getitem__(self, index: int) -> str:
        return self.words[index]

    def __setitem__(self, index: int, word: str) -> None:
        self.words[index] = word

    def __delitem__(self, index: int) -> None:
        del self.words[index]

    def __call__(self, separator: str = " ") -> str:
        return separator.join(self.words)

    def __str__(self) -> str:
        return f"WordBag({len(self.words)})"


class Closeable(abc.ABC):
    @abc.abstractmethod
    def __enter__(self) -> "Closeable":
        raise NotImplementedError

    @abc.abstractmethod
    def __exit__(self, exc_type, exc, tb) -> bool:
        """Release the resource."""
        raise NotImplementedError

    @abc.abstractmethod
    def close(self) -> None:
        raise NotImplementedError


class Resource(Closeable):
    def __init__(self, name: str = "db") -> None:
        self.name = name
        self.events: List[str] = []

    def __enter__(self) -> "Resource":
        self.events.append("enter")
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.events.append("exit" if exc_type is None else f"exit {exc_type.__name__}")
        return exc_type is KeyError

    def close(self) -> None:
        self.events.append("close")


class Countdown:
    def __init__(self, start: int = 3) -> None:
        self.current = start

    def __iter__(self) -> "Countdown":
        return self

    def __next__(self) -> int:
        if self.current <= 0:
            raise StopIteration
        self.current -= 1
        return self.current + 1


class Letters:
    """Sequence exposing only __getitem__, iterated through the legacy protocol."""

    def __getitem__(self, index: int) -> str:
        return "abc"[index]
