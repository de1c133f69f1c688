"""
This module contains the IOInterface abstract base class and its implementations.
"""

from abc import ABC, abstractmethod


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the interface for input/output operations of the
    tracker front end.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Get input from the user with a prompt."""
        pass

    @abstractmethod
    def confirm(self, prompt: str) -> bool:
        """Ask the user a yes/no question."""
        pass


class DummyIOInterface(IOInterface):
    """
    A dummy IO interface for simulation purposes. Does not perform any actual IO.
    """

    def output(self, message: str) -> None:
        """Simulates output operation."""
        pass

    def input(self, prompt: str) -> str:
        """Simulates input operation."""
        return ""

    def confirm(self, prompt: str) -> bool:
        """Never confirms, so destructive commands are skipped."""
        return False


class TestIOInterface(IOInterface):
    """
    A test IO interface for testing purposes. Collects output messages and replays queued input.

    Methods
    -------
    def output(self, message):
        Collect an output message.

    def input(self, prompt):
        Return the next queued input, or "quit" once the queue is empty.

    def confirm(self, prompt):
        Return the next queued confirmation, defaulting to False.
    """

    __test__ = False

    def __init__(self, inputs=None, confirmations=None):
        self.sent_messages = []
        self.prompts = []
        self.input_responses = list(inputs or [])
        self.confirm_responses = list(confirmations or [])

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.input_responses:
            return self.input_responses.pop(0)
        return "quit"

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if self.confirm_responses:
            return self.confirm_responses.pop(0)
        return False


class ConsoleIOInterface(IOInterface):
    """
    A console IO interface for interactive tracking.
    """

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)

    def confirm(self, prompt: str) -> bool:
        answer = input(f"{prompt} [y/N] ").strip().lower()
        return answer in ("y", "yes")
