"""Domain services for the Black Times simulation.

Every service is a plain function over :class:`WorldState`.  Bad input
yields ``None``/``False`` rather than an exception.

Usage::

    from blacktimes.sim.mechanics import (
        found_colony, process_colony,
        process_player_economy,
        select_research, process_research,
        find_path, set_destination, process_fleets,
        detect_combats, auto_resolve,
        send_message, declare_war,
        check_victory,
    )
"""

# -- colony ------------------------------------------------------------------
from .colony import (
    calculate_outputs,
    can_build,
    enqueue_building,
    enqueue_ship,
    found_colony,
    process_colony,
    remove_from_build_queue,
    rush_build,
    set_workers,
)

# -- economy -----------------------------------------------------------------
from .economy import IncomeReport, player_income, process_player_economy

# -- research ----------------------------------------------------------------
from .research import (
    available_techs,
    can_research,
    grant_technology,
    load_tech_tree,
    process_research,
    research_progress,
    select_research,
)

# -- ship design -------------------------------------------------------------
from .ship_design import (
    available_components,
    build_ship,
    create_default_designs,
    create_design,
    find_design,
    spawn_ship,
)

# -- movement ----------------------------------------------------------------
from .movement import (
    cancel_movement,
    find_path,
    merge_fleets,
    process_fleets,
    reachable_stars,
    set_destination,
    split_fleet,
)

# -- combat ------------------------------------------------------------------
from .combat import CombatResult, auto_resolve, detect_combats, fleet_power

# -- diplomacy ---------------------------------------------------------------
from .diplomacy import (
    accept_proposal,
    declare_war,
    init_all_relations,
    make_contact,
    propose_peace,
    propose_treaty,
    reject_proposal,
    send_message,
)

# -- victory -----------------------------------------------------------------
from .victory import calculate_score, check_victory

__all__ = [
    # colony
    "found_colony",
    "calculate_outputs",
    "process_colony",
    "set_workers",
    "can_build",
    "enqueue_building",
    "enqueue_ship",
    "remove_from_build_queue",
    "rush_build",
    # economy
    "IncomeReport",
    "player_income",
    "process_player_economy",
    # research
    "load_tech_tree",
    "can_research",
    "available_techs",
    "select_research",
    "grant_technology",
    "process_research",
    "research_progress",
    # ship design
    "available_components",
    "create_design",
    "create_default_designs",
    "find_design",
    "spawn_ship",
    "build_ship",
    # movement
    "find_path",
    "reachable_stars",
    "set_destination",
    "cancel_movement",
    "process_fleets",
    "merge_fleets",
    "split_fleet",
    # combat
    "CombatResult",
    "detect_combats",
    "auto_resolve",
    "fleet_power",
    # diplomacy
    "init_all_relations",
    "make_contact",
    "send_message",
    "declare_war",
    "propose_peace",
    "propose_treaty",
    "accept_proposal",
    "reject_proposal",
    # victory
    "calculate_score",
    "check_victory",
]
