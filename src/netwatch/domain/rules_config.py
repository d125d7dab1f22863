"""Declarative rule configuration for the NetWatch domain."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EnergyRules:
    """Energy pool sizing."""

    base_capacity: int = 100
    capacity_per_level: int = 10
    experience_per_level_unit: int = 100


@dataclass(frozen=True, slots=True)
class ComputerRules:
    """Starting resources and limits for a newly provisioned computer."""

    default_storage: int = 1000
    default_cpu: int = 100
    default_memory: int = 512
    max_firewall_level: int = 100
    max_name_length: int = 50


@dataclass(frozen=True, slots=True)
class DefenseRules:
    """Defense module level range and effectiveness curve."""

    min_level: int = 1
    max_level: int = 5
    base_effectiveness: int = 20
    effectiveness_per_level: int = 15


@dataclass(frozen=True, slots=True)
class HackRules:
    """Hack timing and the default outcome roll."""

    default_duration_seconds: int = 300
    outcome_die: str = "1d100"
    min_success_chance: float = 0.05


@dataclass(frozen=True, slots=True)
class AddressRules:
    """Private address space used for computer IPs."""

    first_octet: int = 10
    octet_min: int = 1
    octet_max: int = 255
    max_attempts: int = 100


@dataclass(frozen=True, slots=True)
class ProgressionRules:
    """Eligibility thresholds for progression unlocks."""

    tool_min_level: int = 3
    defense_min_money: int = 500
    max_key_length: int = 50


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    energy: EnergyRules = EnergyRules()
    computer: ComputerRules = ComputerRules()
    defense: DefenseRules = DefenseRules()
    hacking: HackRules = HackRules()
    addressing: AddressRules = AddressRules()
    progression: ProgressionRules = ProgressionRules()


DEFAULT_RULES = RulesConfig()
