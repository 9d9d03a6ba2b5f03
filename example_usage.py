#!/usr/bin/env python3
"""
Example usage of envaridator.

Run with a few variables set to see the aggregated report, e.g.:
    API_URL=http://example.com PORT=abc python example_usage.py
"""

from envaridator import Envaridator, ValidationError, ValidationReportError
from envaridator.logging import bootstrap_logging
from envaridator.validators import all_of, boolean, integer, optional, required, url

bootstrap_logging()

env = Envaridator()

api_url = env.register('API_URL', all_of(required(), url()), 'Base URL of the upstream API')
port = env.register('PORT', optional(integer(minimum=1, maximum=65535), default=8000), 'Port to listen on')
local = env.register('LOCAL', optional(boolean(), default=False), 'Whether the app runs on a workstation')


def _local_uses_default_port():
    if local.value and port.value != 8000:
        raise ValidationError('LOCAL=true requires the default port 8000')


env.register_post_validation('Local runs use port 8000', _local_uses_default_port)


def main():
    print(env.describe_all_markdown())
    print()
    try:
        env.validate()
    except ValidationReportError as e:
        print(e.guidance)
        return 1

    print(f"✅ API_URL={api_url.value} PORT={port.value} LOCAL={local.value}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
