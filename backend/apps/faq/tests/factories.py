# apps/faq/tests/factories.py
import factory
from factory.django import DjangoModelFactory

from ..models import FaqEntry


class FaqEntryFactory(DjangoModelFactory):
    class Meta:
        model = FaqEntry

    title = factory.Sequence(lambda n: f"Question {n}")
    blocks = factory.LazyFunction(lambda: [{'type': 'text', 'content': 'We ship within two business days.'}])
    is_visible = True
    order = factory.Sequence(lambda n: n)
