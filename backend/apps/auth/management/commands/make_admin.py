"""
Management command to promote an existing account to the ADMIN role
"""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

User = get_user_model()


class Command(BaseCommand):
    help = 'Give an existing user the ADMIN role, or list accounts when no email is given'

    def add_arguments(self, parser):
        parser.add_argument('email', nargs='?', help='Email of the account to promote')

    def handle(self, *args, **options):
        email = options.get('email')

        if not email:
            for user in User.objects.order_by('created_at'):
                self.stdout.write(f'{user.email} - Role: {user.role}')
            self.stdout.write('Usage: python manage.py make_admin your@email.com')
            return

        updated = User.objects.filter(
            email__iexact=User.objects.normalize_email(email)
        ).update(role=User.Role.ADMIN)
        if not updated:
            raise CommandError(f'No user with email {email}')

        self.stdout.write(self.style.SUCCESS(f'Updated {email} to ADMIN role'))
