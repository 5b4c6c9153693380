"""Combat turn state machine.

States and transitions:

    NoCombat --attack--> RollInitiative --> PlayerTurn <--> EnemyTurn
    PlayerTurn/EnemyTurn --a side is wiped out--> CombatEnds --> NoCombat

NoCombat is a campaign whose ``combat`` is None; PlayerTurn and EnemyTurn
are ``CombatEncounter.turn``. One "attack" action resolves the pending enemy
half-turn (if the enemy holds the turn), the player's half-turn, and, when
the enemy has not acted yet in this action, the enemy's reply. The
alternation therefore survives across actions whichever side won
initiative.

Every attack writes one roll line to the rules log; every half-turn writes
exactly one consequence line to the narrative log.
"""

from __future__ import annotations

from mythweaver.core.config import GameSettings
from mythweaver.core.constants import (
    D20,
    NOTHING_TO_ATTACK_LINE,
    PLAYER_DAMAGE_DIE,
    PLAYER_DEATH_LINE,
)
from mythweaver.core.exceptions import CombatError, InvalidGameStateError
from mythweaver.core.logging import get_logger
from mythweaver.engine.dice import DiceRoller
from mythweaver.engine.rules import apply_damage, attack_modifier, check_modifier
from mythweaver.models.campaign import Campaign
from mythweaver.models.combat import CombatEncounter
from mythweaver.models.enums import TurnOwner


logger = get_logger(__name__)


# =============================================================================
# Initiative
# =============================================================================


def roll_initiative(campaign: Campaign, roller: DiceRoller) -> Campaign:
    """Open an encounter: player d20 + DEX vs the lead enemy's d20 + bonus.

    Ties go to the player.

    Raises:
        InvalidGameStateError: If combat is already running.
        CombatError: If there is no living enemy to fight.
    """
    if campaign.in_combat:
        raise InvalidGameStateError(
            "Initiative is only rolled from NoCombat",
            current_state=campaign.combat.turn if campaign.combat else None,
        )
    living = campaign.living_enemies
    if not living:
        raise CombatError("Cannot start combat without a living enemy", combatant=campaign.character.name)

    character = campaign.character
    _, lead = living[0]

    player_mod = check_modifier(character, character.stats.dexterity_modifier)
    player_roll = roller.roll_die(D20)
    enemy_roll = roller.roll_die(D20)
    player_total = player_roll + player_mod
    enemy_total = enemy_roll + lead.initiative_bonus

    first = TurnOwner.PLAYER if player_total >= enemy_total else TurnOwner.ENEMY
    logger.info(
        "Initiative rolled",
        player_total=player_total,
        enemy=lead.name,
        enemy_total=enemy_total,
        first=first,
    )

    opener = "You move first." if first == TurnOwner.PLAYER else f"The {lead.name} moves first."
    return (
        campaign.with_combat(CombatEncounter(turn=first))
        .with_rules(
            f"Initiative: you d20 {player_roll} {player_mod:+d} = {player_total} vs "
            f"{lead.name} d20 {enemy_roll} {lead.initiative_bonus:+d} = {enemy_total}; "
            f"{first} acts first"
        )
        .with_log(f"Steel is drawn. {opener}")
    )


# =============================================================================
# Half-turns
# =============================================================================


def _end_combat(campaign: Campaign, outcome: str) -> Campaign:
    logger.info("Combat ended", outcome=outcome)
    return campaign.with_combat(None).with_rules(f"Combat ends: {outcome}")


def player_turn(campaign: Campaign, roller: DiceRoller, settings: GameSettings) -> Campaign:
    """Resolve the player's attack half-turn and pass the turn to the enemy.

    Targets the first living enemy, or every living enemy when
    ``settings.target_mode`` is "all". Each swing gets its own rules line;
    the narrative log gets one line for the whole half-turn.
    """
    combat = campaign.combat
    if combat is None or combat.turn != TurnOwner.PLAYER:
        raise InvalidGameStateError(
            "Not the player's turn",
            current_state=combat.turn if combat else "no_combat",
            expected_states=[TurnOwner.PLAYER],
        )

    targets = campaign.living_enemies
    if settings.target_mode == "first":
        targets = targets[:1]

    character = campaign.character
    modifier = attack_modifier(character, campaign.inventory)
    consequences: list[str] = []

    for index, enemy in targets:
        check = roller.check(modifier, settings.attack_dc)
        if not check.success:
            campaign = campaign.with_rules(f"You attack {enemy.name}: {check.describe()}")
            consequences.append(f"You miss the {enemy.name}.")
            continue

        damage_roll = roller.roll_die(PLAYER_DAMAGE_DIE)
        damage = max(1, damage_roll + character.stats.strength_modifier)
        hp = enemy.hp - damage
        campaign = campaign.with_rules(
            f"You attack {enemy.name}: {check.describe()}; "
            f"damage d{PLAYER_DAMAGE_DIE} {damage_roll} "
            f"{character.stats.strength_modifier:+d} = {damage}"
        )
        if hp <= 0:
            campaign = campaign.with_enemy(index, enemy.model_copy(update={"hp": 0, "alive": False}))
            consequences.append(f"You strike the {enemy.name} for {damage}. The {enemy.name} falls.")
            logger.info("Enemy slain", enemy=enemy.name, damage=damage)
        else:
            campaign = campaign.with_enemy(index, enemy.model_copy(update={"hp": hp}))
            consequences.append(f"You strike the {enemy.name} for {damage}.")

    campaign = campaign.with_log(" ".join(consequences))

    if not campaign.living_enemies:
        return _end_combat(campaign, "victory")

    return campaign.with_combat(
        combat.model_copy(update={"turn": TurnOwner.ENEMY, "round": combat.round + 1})
    )


def enemy_turn(campaign: Campaign, roller: DiceRoller, settings: GameSettings) -> Campaign:
    """Resolve every living enemy's attack and pass the turn to the player.

    A hit that leaves the player at 0 hp or below records a death save
    failure; the third one kills the character, stops the remaining attacks
    and ends combat. The narrative log gets one line for the whole half-turn.
    """
    combat = campaign.combat
    if combat is None or combat.turn != TurnOwner.ENEMY:
        raise InvalidGameStateError(
            "Not the enemy's turn",
            current_state=combat.turn if combat else "no_combat",
            expected_states=[TurnOwner.ENEMY],
        )

    consequences: list[str] = []
    for _, enemy in campaign.living_enemies:
        attack_check = roller.check(enemy.attack_bonus, settings.attack_dc)
        if not attack_check.success:
            campaign = campaign.with_rules(f"{enemy.name} attacks you: {attack_check.describe()}")
            consequences.append(f"The {enemy.name} misses you.")
            continue

        damage_roll = roller.roll_die(enemy.damage_die)
        damage = max(1, damage_roll + enemy.damage_bonus)
        character = apply_damage(campaign.character, damage)
        campaign = campaign.with_character(character).with_rules(
            f"{enemy.name} attacks you: {attack_check.describe()}; "
            f"damage d{enemy.damage_die} {damage_roll} {enemy.damage_bonus:+d} = {damage}"
        )

        if not character.alive:
            consequences.append(f"The {enemy.name} hits you for {damage}. {PLAYER_DEATH_LINE}")
            return _end_combat(campaign.with_log(" ".join(consequences)), "defeat")
        if character.hp <= 0:
            consequences.append(
                f"The {enemy.name} hits you for {damage}. You collapse, clinging to life "
                f"({character.death_save_failures} of 3 death saves failed)."
            )
        else:
            consequences.append(f"The {enemy.name} hits you for {damage}.")

    return campaign.with_log(" ".join(consequences)).with_combat(
        combat.model_copy(update={"turn": TurnOwner.PLAYER})
    )


# =============================================================================
# Attack action
# =============================================================================


def resolve_attack(campaign: Campaign, roller: DiceRoller, settings: GameSettings) -> Campaign:
    """Run one player "attack" action through the state machine.

    With no living enemy this is a narrative no-op, and any stale encounter
    is closed.
    """
    if not campaign.living_enemies:
        if campaign.in_combat:
            campaign = _end_combat(campaign, "no opponents")
        logger.info("Attack with no target")
        return campaign.with_log(NOTHING_TO_ATTACK_LINE)

    if not campaign.in_combat:
        campaign = roll_initiative(campaign, roller)

    enemy_acted = False
    if campaign.combat is not None and campaign.combat.turn == TurnOwner.ENEMY:
        campaign = enemy_turn(campaign, roller, settings)
        enemy_acted = True

    if campaign.combat is not None:
        campaign = player_turn(campaign, roller, settings)

    if campaign.combat is not None and not enemy_acted:
        campaign = enemy_turn(campaign, roller, settings)

    return campaign


__all__ = [
    "roll_initiative",
    "player_turn",
    "enemy_turn",
    "resolve_attack",
]
