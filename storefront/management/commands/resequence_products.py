"""
Команда для перенумерации display_order товаров без повторов
"""
from django.core.management.base import BaseCommand

from storefront.services.catalog import resequence_display_order


class Command(BaseCommand):
    help = 'Renumbers product display_order to n-1..0 keeping the current list order'

    def handle(self, *args, **options):
        changed = resequence_display_order()
        self.stdout.write(self.style.SUCCESS(f'Resequenced products, {changed} row(s) changed'))
