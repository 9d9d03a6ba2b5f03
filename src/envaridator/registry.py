"""
The registry: registration of environment variables and post-validation
rules, and a single validation pass that reports every failure at once.
"""
import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .envar import Envar, Validator
from .exceptions import DuplicateRegistrationError, ValidationReportError
from .lookup import Lookup, environ_lookup
from .models import RegistrySettings, ValidationReport
from .rule import PostValidator, Rule

logger = logging.getLogger(__name__)


class Envaridator:
    """Handles the registration and validation of environment variables.

    Example:
        env = Envaridator()
        api_url = env.register('API_URL', all_of(required(), url()), 'Base URL of the API')
        env.validate()
        print(api_url.value)
    """

    def __init__(self, lookup: Optional[Lookup] = None, settings: Optional[RegistrySettings] = None):
        self._lookup = lookup or environ_lookup
        self._settings = settings or RegistrySettings()
        self._variables: Dict[str, Envar] = {}
        self._rules: List[Rule] = []

    @property
    def settings(self) -> RegistrySettings:
        return self._settings

    @property
    def variables(self) -> Mapping[str, Envar]:
        """Registered bindings by name, in registration order."""
        return MappingProxyType(self._variables)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    def __contains__(self, name: str) -> bool:
        return name in self._variables

    def __len__(self) -> int:
        return len(self._variables)

    def get(self, name: str) -> Optional[Envar]:
        return self._variables.get(name)

    def register(self, name: str, validator: Validator, description: str) -> Envar:
        """Register an environment variable and return its binding.

        The binding is kept for validate() and also handed back so the caller
        can read its value elsewhere.

        Args:
            name: Name of the environment variable
            validator: Callable taking the raw value (or None) and returning the validated value
            description: Human-readable description of the variable

        Raises:
            DuplicateRegistrationError: If the name is already registered
        """
        if name in self._variables:
            raise DuplicateRegistrationError(name)

        envar = Envar(name, validator, description,
                      lookup=self._lookup, cache_failures=self._settings.cache_failures)
        self._variables[name] = envar
        logger.debug(f"Registered variable {name}")
        return envar

    def register_post_validation(self, description: str, check: PostValidator) -> None:
        """Add a rule that runs after all variable validations.

        Args:
            description: Short description of the rule
            check: Callable raising ValidationError when the configuration breaks the rule
        """
        self._rules.append(Rule(description, check))
        logger.debug(f"Registered post validation rule '{description}'")

    def report(self) -> ValidationReport:
        """Validate every variable, then every rule, and collect all failures."""
        failed_variables = []
        for envar in self._variables.values():
            outcome = envar.evaluate()
            if not outcome.ok:
                failed_variables.append(outcome.error.message)

        failed_rules = []
        for rule in self._rules:
            outcome = rule.evaluate()
            if not outcome.ok:
                message = outcome.error.message
                if self._settings.prefix_rule_descriptions:
                    message = f"{rule.description} - {message}"
                failed_rules.append(message)

        return ValidationReport(failed_variables=failed_variables, failed_rules=failed_rules)

    def validate(self) -> None:
        """Run the validation pass.

        Raises:
            ValidationReportError: If any variable or rule failed, with every failure in the message
        """
        report = self.report()
        if report.ok:
            logger.info(f"Validated {len(self._variables)} variables and {len(self._rules)} rules")
            return

        logger.warning(f"Validation failed: {len(report.failed_variables)} variables "
                       f"and {len(report.failed_rules)} rules are invalid")
        raise ValidationReportError(report.render(), report=report)

    def describe_all(self) -> str:
        """Describe all registered variables, then all rules, each block sorted."""
        envars = sorted(envar.describe() for envar in self._variables.values())
        rules = sorted(rule.description for rule in self._rules)
        return '\n'.join(envars + rules)

    def describe_all_markdown(self) -> str:
        """Describe all registered variables and rules with markdown headings."""
        envars = '\n'.join(sorted(envar.describe(markdown=True) for envar in self._variables.values()))
        rules = '\n'.join(sorted(rule.description for rule in self._rules))

        result = []
        if self._variables:
            result.extend(['#Variables', envars])
        if self._rules:
            result.extend(['#Post validation rules', rules])
        return '\n'.join(result)
