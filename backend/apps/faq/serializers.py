# apps/faq/serializers.py

from django.db.models import Max
from rest_framework import serializers

from .models import FaqEntry


class FaqBlockSerializer(serializers.Serializer):
    """
    One content block. Required fields depend on ``type``:
    text needs ``content``, image needs ``image_url``, link needs ``url``.
    """
    TYPE_CHOICES = ['text', 'image', 'link']
    REQUIRED_BY_TYPE = {
        'text': 'content',
        'image': 'image_url',
        'link': 'url',
    }

    type = serializers.ChoiceField(choices=TYPE_CHOICES)
    content = serializers.CharField(required=False, allow_blank=True)
    image_url = serializers.URLField(required=False, max_length=500)
    alt = serializers.CharField(required=False, allow_blank=True, max_length=200)
    label = serializers.CharField(required=False, allow_blank=True, max_length=200)
    url = serializers.URLField(required=False, max_length=500)
    variant = serializers.ChoiceField(choices=['default', 'muted', 'highlight'], default='default')
    align = serializers.ChoiceField(choices=['left', 'center'], default='left')
    emphasis = serializers.ChoiceField(choices=['normal', 'semibold'], default='normal')
    link_style = serializers.ChoiceField(choices=['link', 'button', 'chip'], required=False)

    def validate(self, attrs):
        required = self.REQUIRED_BY_TYPE[attrs['type']]
        if not attrs.get(required):
            raise serializers.ValidationError({required: f"Required for {attrs['type']} blocks."})
        if attrs['type'] == 'link':
            attrs.setdefault('link_style', 'link')
        return attrs


class FaqEntrySerializer(serializers.ModelSerializer):
    title = serializers.CharField(max_length=200)
    blocks = FaqBlockSerializer(many=True, required=False)
    order = serializers.IntegerField(min_value=0, required=False)

    class Meta:
        model = FaqEntry
        fields = ['id', 'title', 'blocks', 'is_visible', 'order', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def create(self, validated_data):
        if 'order' not in validated_data:
            last = FaqEntry.objects.aggregate(last=Max('order'))['last']
            validated_data['order'] = 0 if last is None else last + 1
        validated_data.setdefault('blocks', [])
        return super().create(validated_data)


class FaqMoveSerializer(serializers.Serializer):
    direction = serializers.ChoiceField(choices=['up', 'down'])
