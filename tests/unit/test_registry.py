"""Tests for registration, the validation pass and descriptions."""

import threading

import pytest

from envaridator import (
    DuplicateRegistrationError,
    Envaridator,
    RegistrySettings,
    ValidationError,
    ValidationReportError,
)
from envaridator.lookup import mapping_lookup
from envaridator.validators import all_of, required, string, url


def _fail(message):
    def check():
        raise ValidationError(message)
    return check


class TestRegister:

    def test_distinct_names(self, envaridator):
        first = envaridator.register('FIRST', str, 'First')
        second = envaridator.register('SECOND', str, 'Second')

        assert envaridator.get('FIRST') is first
        assert envaridator.get('SECOND') is second
        assert len(envaridator) == 2
        assert 'FIRST' in envaridator
        assert list(envaridator.variables) == ['FIRST', 'SECOND']

    def test_duplicate_name(self, envaridator, env_values):
        env_values['NAME'] = 'original'
        first = envaridator.register('NAME', str, 'Original')

        with pytest.raises(DuplicateRegistrationError) as exc_info:
            envaridator.register('NAME', int, 'Duplicate')

        assert str(exc_info.value) == 'Variable NAME already defined!'
        assert exc_info.value.variable_name == 'NAME'
        assert envaridator.get('NAME') is first
        assert first.description == 'Original'
        assert first.value == 'original'

    def test_register_post_validation(self, envaridator):
        envaridator.register_post_validation('Rule one', lambda: None)
        envaridator.register_post_validation('Rule one', lambda: None)

        assert [rule.description for rule in envaridator.rules] == ['Rule one', 'Rule one']

    def test_bindings_use_registry_lookup(self, envaridator, env_values):
        env_values['HOST'] = 'localhost'

        host = envaridator.register('HOST', required(), 'Host')

        assert host.value == 'localhost'


class TestValidate:

    def test_empty_registry(self, envaridator):
        envaridator.validate()
        assert envaridator.report().ok

    def test_all_valid(self, envaridator, env_values):
        env_values.update({'A': '1', 'B': '2'})
        envaridator.register('A', int, 'A')
        envaridator.register('B', int, 'B')
        envaridator.register_post_validation('A below B', lambda: None)

        envaridator.validate()

    def test_collects_every_failure(self, envaridator):
        envaridator.register('ONE', required(), 'One')
        envaridator.register('TWO', required(), 'Two')
        envaridator.register_post_validation('First rule', _fail('first broken'))
        envaridator.register_post_validation('Second rule', _fail('second broken'))

        with pytest.raises(ValidationReportError) as exc_info:
            envaridator.validate()

        assert str(exc_info.value) == (
            'The following environment variables are invalid:\n'
            '\n'
            'ONE - value is null or undefined\n'
            'TWO - value is null or undefined'
            '\n\n'
            'The following validation rules are invalid:\n'
            '\n'
            'first broken\n'
            'second broken'
        )
        assert exc_info.value.report.failed_variables == [
            'ONE - value is null or undefined',
            'TWO - value is null or undefined',
        ]
        assert exc_info.value.report.failed_rules == ['first broken', 'second broken']

    def test_only_rules_fail(self, envaridator):
        envaridator.register_post_validation('Rule', _fail('broken'))

        with pytest.raises(ValidationReportError) as exc_info:
            envaridator.validate()

        assert str(exc_info.value) == (
            '\n\nThe following validation rules are invalid:\n\nbroken'
        )

    def test_rules_run_after_variables(self, envaridator, env_values):
        env_values['PORT'] = '80'
        order = []

        def validator(value):
            order.append('variable')
            return int(value)

        def check():
            order.append('rule')

        envaridator.register_post_validation('Check', check)
        envaridator.register('PORT', validator, 'Port')

        envaridator.validate()

        assert order == ['variable', 'rule']

    def test_prefix_rule_descriptions(self, env_lookup):
        registry = Envaridator(lookup=env_lookup,
                               settings=RegistrySettings(prefix_rule_descriptions=True))
        registry.register_post_validation('Ports differ', _fail('PORT equals ADMIN_PORT'))

        report = registry.report()

        assert report.failed_rules == ['Ports differ - PORT equals ADMIN_PORT']

    def test_revalidates_after_fix(self, envaridator, env_values):
        envaridator.register('TOKEN', required(), 'Token')

        with pytest.raises(ValidationReportError):
            envaridator.validate()

        env_values['TOKEN'] = 'secret'
        envaridator.validate()

    def test_cache_failures_setting(self, env_values, env_lookup):
        registry = Envaridator(lookup=env_lookup, settings=RegistrySettings(cache_failures=True))
        registry.register('TOKEN', required(), 'Token')

        with pytest.raises(ValidationReportError):
            registry.validate()

        env_values['TOKEN'] = 'secret'
        with pytest.raises(ValidationReportError):
            registry.validate()

    def test_circular_validators_are_reported(self, envaridator, env_values):
        env_values.update({'A': 'a', 'B': 'b'})
        bindings = {}
        bindings['A'] = envaridator.register('A', lambda value: bindings['B'].value, 'Reads B')
        bindings['B'] = envaridator.register('B', lambda value: bindings['A'].value, 'Reads A')
        errors = []

        def run():
            try:
                envaridator.validate()
            except ValidationReportError as e:
                errors.append(e)

        thread = threading.Thread(target=run, daemon=True)
        thread.start()
        thread.join(timeout=5)

        assert not thread.is_alive(), 'validate() did not return'
        assert len(errors) == 1
        failed = errors[0].report.failed_variables
        assert len(failed) == 2
        assert failed[0].startswith('A - ')
        assert failed[1].startswith('B - ')
        assert all(line.endswith('circular reference while validating') for line in failed)

    def test_unexpected_validator_error_propagates(self, envaridator):
        def broken(value):
            raise KeyError('missing key')

        envaridator.register('OK', lambda value: value, 'Fine')
        envaridator.register('BROKEN', broken, 'Broken')

        with pytest.raises(KeyError):
            envaridator.validate()

    def test_unexpected_rule_error_propagates(self, envaridator):
        def check():
            raise KeyError('missing key')

        envaridator.register_post_validation('Broken rule', check)

        with pytest.raises(KeyError):
            envaridator.validate()

    def test_url_scenario(self):
        lookup = mapping_lookup({
            'CORRECT_URL': 'https://google.com',
            'WRONG_URL': 'htttps://google.com',
            'SOME_VARIABLE': 'I exist!',
        })
        registry = Envaridator(lookup=lookup)
        https_url = all_of(required(), url(protocols=['https:']))

        correct = registry.register('CORRECT_URL', https_url, 'A valid URL')
        registry.register('WRONG_URL', https_url, 'An invalid URL')
        registry.register('V@R1ABL3', all_of(required(), string()), 'Not set')
        some = registry.register('SOME_VARIABLE', all_of(required(), string()), 'Set')

        with pytest.raises(ValidationReportError) as exc_info:
            registry.validate()

        assert str(exc_info.value) == (
            'The following environment variables are invalid:\n'
            '\n'
            'WRONG_URL - Invalid protocol: https:\n'
            'V@R1ABL3 - value is null or undefined'
        )
        assert correct.value == 'https://google.com'
        assert some.value == 'I exist!'


class TestDescribe:

    @pytest.fixture
    def registry(self, envaridator):
        envaridator.register('ZETA', str, 'Last variable')
        envaridator.register('ALPHA', str, 'First variable')
        envaridator.register_post_validation('Rules are sorted too', lambda: None)
        envaridator.register_post_validation('A rule about ALPHA', lambda: None)
        return envaridator

    def test_describe_all(self, registry):
        assert registry.describe_all() == (
            'ALPHA - First variable\n'
            'ZETA - Last variable\n'
            'A rule about ALPHA\n'
            'Rules are sorted too'
        )

    def test_describe_all_markdown(self, registry):
        assert registry.describe_all_markdown() == (
            '#Variables\n'
            '**ALPHA** - First variable\n'
            '**ZETA** - Last variable\n'
            '#Post validation rules\n'
            'A rule about ALPHA\n'
            'Rules are sorted too'
        )

    def test_markdown_variables_only(self, envaridator):
        envaridator.register('ONLY', str, 'Only variable')

        assert envaridator.describe_all_markdown() == '#Variables\n**ONLY** - Only variable'

    def test_markdown_rules_only(self, envaridator):
        envaridator.register_post_validation('Only rule', lambda: None)

        assert envaridator.describe_all_markdown() == '#Post validation rules\nOnly rule'

    def test_empty(self, envaridator):
        assert envaridator.describe_all() == ''
        assert envaridator.describe_all_markdown() == ''

    def test_describe_does_not_validate(self, envaridator):
        envar = envaridator.register('LAZY', required(), 'Not evaluated')

        envaridator.describe_all()
        envaridator.describe_all_markdown()

        assert not envar.is_evaluated
