"""
Exception classes with built-in guidance for configuration validation.
"""
import sys


class EnvaridatorException(Exception):
    """Base exception for all envaridator errors."""
    def __init__(self, message: str, variable_name: str = None):
        super().__init__(message)
        self.message = message
        self.variable_name = variable_name
        self.guidance = self._generate_guidance()

    def _get_current_command(self):
        """Get the current command being executed."""
        if len(sys.argv) > 0:
            executable = sys.argv[0].split('/')[-1]
            args = sys.argv[1:]
            if args:
                return f"{executable} {' '.join(args)}"
            return executable
        return "unknown command"

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ Configuration error: {self}
💡 Check your configuration and try again
"""


class ValidationError(EnvaridatorException, ValueError):
    """Raised by a validator or post-validation check when a value is invalid.

    Bindings re-raise it with the variable name prefixed to the message.
    """
    pass


class DuplicateRegistrationError(EnvaridatorException):
    """Raised when a variable name is registered twice on the same registry."""
    def __init__(self, variable_name: str):
        super().__init__(f"Variable {variable_name} already defined!", variable_name=variable_name)

    def _generate_guidance(self):
        return f"""
❌ Variable '{self.variable_name}' is registered more than once
💡 Register each environment variable once and share the returned binding
"""


class ValidationReportError(EnvaridatorException):
    """The aggregated failure raised by a validation pass.

    The message is the full multi-line report; ``report`` keeps the
    individual failure lines.
    """
    def __init__(self, message: str, report=None):
        self.report = report
        super().__init__(message)

    def _generate_guidance(self):
        command = self._get_current_command()
        return f"""
❌ Environment configuration is invalid:

{self}

💡 Fix every variable and rule listed above, then run again: {command}
   To list everything that is validated: invoke describe <module>:<registry>
"""
