"""
Management command to seed a development store with accounts and products
"""

import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from faker import Faker

from apps.auth.models import Address
from apps.ecommerce.models import Product, ProductImage

User = get_user_model()
fake = Faker()

CATALOGUE = [
    {
        'title': 'Remoof Carbon Wheelset',
        'description': 'Ultra-light carbon wheels for speed and stability.',
        'price': 129900,
        'category': 'Wheels',
        'stock': 15,
        'hero_image': 'https://images.unsplash.com/photo-1529429617124-aee78b477660?auto=format&fit=crop&w=1200&q=80',
        'model_url': 'https://cdn.remoof.bike/models/wheel.glb',
        'images': [
            'https://images.unsplash.com/photo-1529429617124-aee78b477660?auto=format&fit=crop&w=1200&q=80',
            'https://images.unsplash.com/photo-1508970057347-9f41ec2b3d09?auto=format&fit=crop&w=1200&q=80',
        ],
    },
    {
        'title': 'Aero Handlebar Kit',
        'description': 'Ergonomic aero bars built for endurance rides.',
        'price': 25900,
        'category': 'Cockpit',
        'stock': 30,
        'hero_image': 'https://images.unsplash.com/photo-1508609349937-5ec4ae374ebf?auto=format&fit=crop&w=1200&q=80',
        'images': [
            'https://images.unsplash.com/photo-1508609349937-5ec4ae374ebf?auto=format&fit=crop&w=1200&q=80',
        ],
    },
    {
        'title': 'Precision Ceramic Bottom Bracket',
        'description': 'Smooth rolling bracket with sealed ceramic bearings.',
        'price': 18900,
        'category': 'Drivetrain',
        'stock': 40,
        'hero_image': 'https://images.unsplash.com/photo-1516117172878-fd2c41f4a759?auto=format&fit=crop&w=1200&q=80',
        'images': [
            'https://images.unsplash.com/photo-1516117172878-fd2c41f4a759?auto=format&fit=crop&w=1200&q=80',
        ],
    },
]


class Command(BaseCommand):
    help = 'Seed the store with an admin, a customer and the starter catalogue'

    def add_arguments(self, parser):
        parser.add_argument(
            '--password',
            default='Password123!',
            help='Password for the seeded accounts'
        )
        parser.add_argument(
            '--extra-products',
            type=int,
            default=0,
            help='Number of additional random products to create'
        )
        parser.add_argument(
            '--keep-products',
            action='store_true',
            help='Do not delete existing products first'
        )

    @transaction.atomic
    def handle(self, *args, **options):
        now = timezone.now()

        admin, created = User.objects.get_or_create(
            email='admin@remoof.bike',
            defaults={
                'first_name': 'Remoof',
                'last_name': 'Admin',
                'role': User.Role.ADMIN,
                'email_verified_at': now,
            }
        )
        if created:
            admin.set_password(options['password'])
            admin.save()
        self.stdout.write(f'Admin account: {admin.email} ({"created" if created else "exists"})')

        rider, created = User.objects.get_or_create(
            email='rider@remoof.bike',
            defaults={
                'first_name': 'Everyday',
                'last_name': 'Rider',
                'role': User.Role.USER,
                'email_verified_at': now,
            }
        )
        if created:
            rider.set_password(options['password'])
            rider.save()
            Address.objects.create(
                user=rider,
                line1='123 Bike Lane',
                city='Copenhagen',
                state='Capital',
                postal='2100',
                country='Denmark',
            )
        self.stdout.write(f'Customer account: {rider.email} ({"created" if created else "exists"})')

        if not options['keep_products']:
            # Orders keep their frozen lines when products go away
            Product.objects.all().delete()

        for entry in CATALOGUE:
            entry = dict(entry)
            images = entry.pop('images')
            product = Product.objects.create(**entry)
            ProductImage.objects.bulk_create([
                ProductImage(product=product, url=url, order=position)
                for position, url in enumerate(images)
            ])

        categories = sorted({entry['category'] for entry in CATALOGUE})
        for _ in range(options['extra_products']):
            Product.objects.create(
                title=fake.catch_phrase()[:200],
                description=fake.paragraph(nb_sentences=3),
                price=random.randint(1000, 150000),
                category=random.choice(categories),
                stock=random.randint(0, 50),
            )

        self.stdout.write(
            self.style.SUCCESS(
                f'Seeded {Product.objects.count()} products'
            )
        )
