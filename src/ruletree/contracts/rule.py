"""Base classes for rule configuration models.

Rule configurations are Pydantic models. The tuple swapper only handles
classes registered with ``@tuple_entity`` (see ruletree.core.descriptors);
these bases carry no tuple metadata of their own.
"""

from pydantic import BaseModel, ConfigDict


class RuleConfiguration(BaseModel):
    """A structured object holding one rule type's settings.

    Unknown keys in stored YAML are ignored so that payloads written by a
    newer node still load on an older one.
    """

    model_config = ConfigDict(extra="ignore")


class GlobalRuleConfiguration(RuleConfiguration):
    """Cluster-wide rule configuration stored at a versioned global node.

    Global rules are not scoped to a database. They are always whole-object
    singletons addressed by ``/rules/<name>``.
    """
