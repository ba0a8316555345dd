import json
import logging
from django.http import HttpResponse, JsonResponse
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from django.utils.decorators import method_decorator

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name='dispatch')
class BaseWebhookView(View):
    """Base webhook view for payment gateways"""

    http_method_names = ['post']

    def post(self, request, *args, **kwargs):
        """Handle webhook POST request"""
        # Verify webhook signature before looking at the payload
        event = self.verify_event(request)
        if event is None:
            logger.warning(f"Rejected webhook delivery in {self.__class__.__name__}")
            return JsonResponse({'message': 'Invalid webhook signature or payload'}, status=400)

        # Process webhook event; a failure makes the gateway retry later
        try:
            self.process_webhook(event)
        except Exception as e:
            logger.error(f"Webhook processing error: {e}", exc_info=True)
            return HttpResponse(status=500)

        return JsonResponse({'received': True})

    def verify_event(self, request):
        """Return the parsed event, or None when the delivery is not authentic"""
        raise NotImplementedError("Subclasses must implement verify_event")

    def parse_payload(self, payload):
        """Parse webhook payload"""
        try:
            return json.loads(payload.decode('utf-8') if isinstance(payload, bytes) else payload)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.error("Invalid JSON in webhook payload")
            return None

    def process_webhook(self, event):
        """Process webhook event - to be implemented by subclasses"""
        raise NotImplementedError("Subclasses must implement process_webhook")
