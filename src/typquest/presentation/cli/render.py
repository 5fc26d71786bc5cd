"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import Iterable, Sequence

from typquest.domain.entities import Combatant
from typquest.services.battle_service import (
    ActionRejectedEvent,
    ActionResolvedEvent,
    Battle,
    BattleEvent,
    BattleResolvedEvent,
    BattleStartedEvent,
    ChallengePresentedEvent,
    CombatantDefeatedEvent,
    PlayerFledEvent,
    RewardEarnedEvent,
    RoundStartedEvent,
    TurnStartedEvent,
)

BAR_WIDTH = 20


def debug_enabled() -> bool:
    """Return True only when TYPQUEST_DEBUG is explicitly set to '1'."""
    return os.getenv("TYPQUEST_DEBUG") == "1"


def format_bar(current: int, maximum: int, width: int = BAR_WIDTH) -> str:
    """Return a fixed-width gauge such as '[#####-----]'."""
    if maximum <= 0 or width <= 0:
        return "[" + "-" * max(width, 0) + "]"
    filled = round(width * max(0, min(current, maximum)) / maximum)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def format_combatant_line(combatant: Combatant) -> str:
    return (
        f"{combatant.name:<16} HP {format_bar(combatant.hp, combatant.max_hp)} "
        f"{combatant.hp}/{combatant.max_hp}  MP {combatant.mp}/{combatant.max_mp}"
    )


def format_event(event: BattleEvent) -> str | None:
    """Return the text for one battle event, or None for events with no text."""
    if isinstance(event, BattleStartedEvent):
        return f"{event.enemy_name} appears!"
    if isinstance(event, RoundStartedEvent):
        return f"Round {event.round_number}" if debug_enabled() else None
    if isinstance(event, TurnStartedEvent):
        if event.action_points:
            return f"{event.actor_name}'s turn ({event.action_points} AP)."
        return f"{event.actor_name}'s turn."
    if isinstance(event, ChallengePresentedEvent):
        return None
    if isinstance(event, ActionResolvedEvent):
        outcome = event.outcome
        if outcome.evaded:
            return f"{event.actor_name} uses {event.skill_name}... but {event.target_name} dodges!"
        if outcome.damage or outcome.guard_absorbed:
            text = f"{event.actor_name} uses {event.skill_name}: {event.target_name} takes {outcome.damage} damage."
            if outcome.is_critical:
                text += " Critical hit!"
            if outcome.guard_absorbed:
                text += f" ({outcome.guard_absorbed} blocked)"
            return text
        if outcome.healing:
            return f"{event.actor_name} uses {event.skill_name} and recovers {outcome.healing} HP."
        if outcome.guard_gained:
            return f"{event.actor_name} uses {event.skill_name} and braces for {outcome.guard_gained}."
        return f"{event.actor_name} uses {event.skill_name}... but it misses!"
    if isinstance(event, RewardEarnedEvent):
        return f"+{event.points} EX (battle total {event.battle_total})."
    if isinstance(event, CombatantDefeatedEvent):
        return f"{event.combatant_name} is defeated!"
    if isinstance(event, PlayerFledEvent):
        return f"{event.player_name} runs away."
    if isinstance(event, BattleResolvedEvent):
        return f"Battle over: {event.outcome.value}."
    if isinstance(event, ActionRejectedEvent):
        return f"Cannot do that: {event.message}"
    return None


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_bullet_lines(lines: Iterable[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        print(f"- {line}")


def render_events(events: Sequence[BattleEvent]) -> None:
    lines = [text for text in (format_event(event) for event in events) if text]
    render_bullet_lines(lines)


def render_battle_status(battle: Battle) -> None:
    render_heading(f"Round {battle.round_number}")
    print(format_combatant_line(battle.player))
    print(format_combatant_line(battle.enemy))
    if debug_enabled():
        print(f"[turn {battle.turn_count} order={list(battle.turn_order)} ex={battle.reward_points}]")
