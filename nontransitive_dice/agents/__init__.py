"""
Registry of agents that answer the engine's prompts on the user's side (scripted, random, counter-pick).
Decorate an Agent subclass with @register_agent("name") to expose it to scripts and tests.
Every module in this directory is imported below so its decorators run.
"""

import importlib
import os
import pkgutil

AGENT_MAP = {}

# agents that need constructor data and cannot be built by name alone
NOT_SIMULATABLE = ("scripted",)


def register_agent(name):
	"""
	Decorator registering an agent class under a name.
	Usage:
		@register_agent("random")
		class RandomAgent(Agent): ...
	"""
	def decorator(cls):
		AGENT_MAP[name] = cls
		return cls
	return decorator


def simulatable_agents():
	return sorted(name for name in AGENT_MAP if name not in NOT_SIMULATABLE)


def make_agent(name: str, **kwargs):
	"""
	Build a registered agent by name.
	Raises:
		ValueError: If the name is unknown or the agent cannot run unattended.
	"""
	if name not in AGENT_MAP or name in NOT_SIMULATABLE:
		raise ValueError(f"Unknown agent: {name}. Supported: {simulatable_agents()}")
	return AGENT_MAP[name](**kwargs)


_this_dir = os.path.dirname(__file__)
for _, modname, ispkg in pkgutil.iter_modules([_this_dir]):
	if not ispkg and modname != "base":
		importlib.import_module(f"{__name__}.{modname}")
