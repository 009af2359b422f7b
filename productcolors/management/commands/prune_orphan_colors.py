"""
Команда для поиска и удаления цветов, на которые не ссылается ни один вариант
"""
import logging

from django.core.management.base import BaseCommand

from productcolors.models import Color

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Lists colours with no variants; deletes them with --delete'

    def add_arguments(self, parser):
        parser.add_argument(
            '--delete',
            action='store_true',
            help='Actually delete the orphaned colours (default: dry run)'
        )

    def handle(self, *args, **options):
        orphans = Color.objects.filter(variants__isnull=True).order_by('created_at')
        count = orphans.count()

        for color in orphans:
            self.stdout.write(f'{color.pk}  {color.name} ({color.value})  images={len(color.images or [])}')

        if not options['delete']:
            self.stdout.write(self.style.WARNING(f'{count} orphaned colour(s) found, dry run'))
            return

        deleted, _ = orphans.delete()
        logger.info("Pruned %d orphaned colour(s)", deleted)
        self.stdout.write(self.style.SUCCESS(f'Deleted {deleted} orphaned colour(s)'))
