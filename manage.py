#!/usr/bin/env python
# CONTACT LIFECYCLE CRM - DJANGO MANAGEMENT SCRIPT
#
# Common commands:
# - python manage.py migrate            # Apply migrations to database
# - python manage.py createsuperuser    # Create admin user
# - python manage.py runserver          # Start development server
# - python manage.py test               # Run tests
# ==============================================================================

import os
import sys


def main():
    """Run administrative tasks"""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
