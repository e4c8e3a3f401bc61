"""Conversation state machine.

Turns a free-text prompt into a committed question list:

    IDLE --submit--> GENERATING --success--> PRESENTING
                          |
                          +------failure---> IDLE (apology appended)

    any phase --reset--> IDLE (log cleared, epoch advanced)

The progress simulator and the generation call run concurrently and never
write the state themselves. Both hand events to _apply(), the only place the
state is replaced.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from ..exceptions import EmptyInputError, GenerationError, InvalidStateError
from ..generation import GenerationClient
from ..progress import DEFAULT_MAX_INDEX, ProgressSimulator
from .events import (
    ConversationEvent,
    GenerationFailed,
    GenerationSucceeded,
    ProgressCompleted,
    StageAdvanced,
)
from .messages import APOLOGY_MESSAGE, format_success_message
from .models import ChatMessage, ConversationState, MessageRole, Phase

# Pause between showing the last progress stage and presenting the form
COMPLETION_DELAY_SECONDS = 0.3

StateListener = Callable[[ConversationState], None]
SimulatorFactory = Callable[[Callable[[int], None]], ProgressSimulator]


class ConversationStateMachine:
    """Owns the message log, the phase and the committed questions.

    Hidden design decisions:
    - Pairing of progress simulation with the generation request
    - Stale-result suppression through generation epochs
    - Wording of the assistant replies

    Usage:
        machine = ConversationStateMachine(client)
        machine.add_listener(render)
        state = await machine.submit("Create a 3-question NPS survey")
        if state.phase is Phase.PRESENTING:
            show(state.committed_questions)
        machine.reset()
    """

    def __init__(
        self,
        client: GenerationClient,
        simulator_factory: SimulatorFactory | None = None,
        completion_delay: float = COMPLETION_DELAY_SECONDS,
    ):
        """Initialize the state machine.

        Args:
            client: Generation client used for every submission
            simulator_factory: Builds a progress simulator around an advance
                callback (default: ProgressSimulator with 5 stages, 1s apart)
            completion_delay: Seconds to hold the last progress stage before
                presenting the form
        """
        self._client = client
        self._simulator_factory = simulator_factory or (lambda on_advance: ProgressSimulator(on_advance))
        self._completion_delay = completion_delay
        self._state = ConversationState()
        self._simulator: ProgressSimulator | None = None
        self._max_stage_index = DEFAULT_MAX_INDEX
        self._listeners: list[StateListener] = []
        self._debug_callback: Any | None = None

    @property
    def state(self) -> ConversationState:
        """Current snapshot."""
        return self._state

    @property
    def max_stage_index(self) -> int:
        """Last stage index of the current (or most recent) simulator."""
        return self._max_stage_index

    def add_listener(self, listener: StateListener) -> None:
        """Register a callable invoked with every new snapshot."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        """Unregister a snapshot listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for transition tracing.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Conversation", message)

    async def submit(self, prompt: str) -> ConversationState:
        """Generate a form for a prompt and commit it.

        Generation failures do not raise: they append an apology and return
        the conversation to IDLE.

        Args:
            prompt: Natural-language description of the form

        Returns:
            Snapshot after the generation resolved. If the conversation was
            reset while the request was in flight, the snapshot taken when
            this generation started is returned instead; its epoch is older
            than the current one.

        Raises:
            InvalidStateError: If the phase is not IDLE
            EmptyInputError: If the prompt is blank
        """
        if self._state.phase is not Phase.IDLE:
            raise InvalidStateError(
                f"Cannot submit while {self._state.phase.value}; reset the conversation first"
            )
        if not prompt or not prompt.strip():
            raise EmptyInputError("Prompt must not be empty")

        epoch = self._state.epoch
        user_message = ChatMessage(role=MessageRole.USER, content=prompt)
        self._replace(
            messages=self._state.messages + (user_message,),
            phase=Phase.GENERATING,
            stage_index=0,
            last_error=None,
        )
        started = self._state
        self._debug("info", f"Generating (epoch {epoch}): '{prompt[:50]}'")

        simulator = self._simulator_factory(
            lambda index: self._apply(StageAdvanced(epoch=epoch, index=index))
        )
        self._simulator = simulator
        self._max_stage_index = simulator.max_index
        simulator.start()

        try:
            questions = await self._client.generate(prompt)
        except GenerationError as e:
            self._debug("error", f"Generation failed ({e.kind.value}): {e}")
            self._apply(GenerationFailed(epoch=epoch, error=e))
            return self._outcome(epoch, started)
        except BaseException:
            self._abandon(epoch)
            raise

        self._apply(ProgressCompleted(epoch=epoch))
        if self._completion_delay > 0 and self._is_current(epoch):
            try:
                await asyncio.sleep(self._completion_delay)
            except BaseException:
                self._abandon(epoch)
                raise

        self._apply(GenerationSucceeded(epoch=epoch, questions=questions))
        return self._outcome(epoch, started)

    async def regenerate(self, prompt: str) -> ConversationState:
        """Discard the presented form and generate a new one.

        Equivalent to reset() followed by submit(prompt).

        Raises:
            InvalidStateError: If a generation is in flight
            EmptyInputError: If the prompt is blank (nothing is reset)
        """
        if self._state.phase is Phase.GENERATING:
            raise InvalidStateError("Cannot regenerate while a generation is in flight")
        if not prompt or not prompt.strip():
            raise EmptyInputError("Prompt must not be empty")

        self.reset()
        return await self.submit(prompt)

    def reset(self) -> None:
        """Clear the conversation and return to IDLE.

        Allowed in any phase. An in-flight request is not cancelled; its
        result is discarded when it arrives.
        """
        self._stop_simulator()
        next_epoch = self._state.epoch + 1
        self._commit(ConversationState(epoch=next_epoch))
        self._debug("info", f"Conversation reset (epoch {next_epoch})")

    def _is_current(self, epoch: int) -> bool:
        return epoch == self._state.epoch

    def _outcome(self, epoch: int, started: ConversationState) -> ConversationState:
        return self._state if self._is_current(epoch) else started

    def _apply(self, event: ConversationEvent) -> None:
        """Single transition function; the only writer of the state."""
        if not self._is_current(event.epoch):
            self._debug(
                "debug",
                f"Dropped stale {type(event).__name__} from epoch {event.epoch}"
            )
            return

        if isinstance(event, StageAdvanced):
            if self._state.phase is Phase.GENERATING and event.index > self._state.stage_index:
                self._replace(stage_index=min(event.index, self._max_stage_index))

        elif isinstance(event, ProgressCompleted):
            self._stop_simulator()
            if self._state.phase is Phase.GENERATING:
                self._replace(stage_index=self._max_stage_index)

        elif isinstance(event, GenerationSucceeded):
            self._stop_simulator()
            count = len(event.questions)
            reply = ChatMessage(role=MessageRole.ASSISTANT, content=format_success_message(count))
            self._replace(
                messages=self._state.messages + (reply,),
                phase=Phase.PRESENTING,
                stage_index=self._max_stage_index,
                committed_questions=event.questions,
            )
            self._debug("info", f"Committed {count} question(s)")

        elif isinstance(event, GenerationFailed):
            self._stop_simulator()
            reply = ChatMessage(role=MessageRole.ASSISTANT, content=APOLOGY_MESSAGE)
            self._replace(
                messages=self._state.messages + (reply,),
                phase=Phase.IDLE,
                last_error=event.error.kind,
            )

        else:
            raise TypeError(f"Unexpected event type: {type(event)}")

    def _abandon(self, epoch: int) -> None:
        """Release GENERATING after the submitting task was interrupted."""
        if self._is_current(epoch) and self._state.phase is Phase.GENERATING:
            self._stop_simulator()
            self._replace(phase=Phase.IDLE)
            self._debug("warning", f"Generation abandoned (epoch {epoch})")

    def _stop_simulator(self) -> None:
        if self._simulator is not None:
            self._simulator.stop()
            self._simulator = None

    def _replace(self, **changes: Any) -> None:
        self._commit(self._state.model_copy(update=changes))

    def _commit(self, state: ConversationState) -> None:
        """Publish a snapshot. A failing listener never undoes the transition."""
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                self._debug("error", f"State listener {listener!r} failed: {e!r}")
