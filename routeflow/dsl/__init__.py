"""YAML scenario loading."""

from routeflow.dsl.loader import Scenario, load_scenario, load_scenario_yaml

__all__ = ["Scenario", "load_scenario", "load_scenario_yaml"]
