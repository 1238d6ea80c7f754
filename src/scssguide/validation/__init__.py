from scssguide.validation.catalog import RULES, RuleGroup, RuleInfo
from scssguide.validation.validator import ALL_RULES, RuleFunc, evaluate

__all__ = ["ALL_RULES", "RULES", "RuleFunc", "RuleGroup", "RuleInfo", "evaluate"]
