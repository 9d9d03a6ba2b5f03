"""
Invoke tasks for describing and validating a registry.

The target is given as 'module:attribute', naming an Envaridator instance
importable from the current environment. Expose the tasks from the
project's own tasks.py:

    from envaridator.tasks import namespace

and run them with:

    invoke describe --target myapp.config:env --markdown
"""

import importlib
import logging
import sys
from pathlib import Path

from invoke import Collection, task
from invoke.exceptions import Exit

from .exceptions import ValidationReportError
from .registry import Envaridator

logger = logging.getLogger(__name__)


def load_registry(target: str) -> Envaridator:
    """Import the registry named by 'module:attribute'.

    Raises:
        Exit: If the target is malformed, cannot be imported, or is not a registry
    """
    module_name, sep, attribute = target.partition(':')
    if not sep or not module_name or not attribute:
        raise Exit(f"❌ Invalid target '{target}', expected 'module:attribute'", code=2)

    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise Exit(f"❌ Cannot import module '{module_name}': {e}", code=2)

    registry = getattr(module, attribute, None)
    if not isinstance(registry, Envaridator):
        raise Exit(f"❌ '{target}' is not an Envaridator instance", code=2)

    logger.debug(f"Loaded registry {target} with {len(registry)} variables")
    return registry


@task(help={
    'target': "Registry to describe, as 'module:attribute'",
    'markdown': "Emit markdown with section headings"
})
def describe(c, target, markdown=False):
    """Describe every registered variable and rule."""
    registry = load_registry(target)
    if markdown:
        print(registry.describe_all_markdown())
    else:
        print(registry.describe_all())


@task(help={'target': "Registry to validate, as 'module:attribute'"})
def validate(c, target):
    """Validate every registered variable and rule, reporting all failures."""
    registry = load_registry(target)
    try:
        registry.validate()
    except ValidationReportError as e:
        raise Exit(e.guidance, code=1)
    print(f"✅ {len(registry)} variables and {len(registry.rules)} rules are valid")


namespace = Collection(describe, validate)
