from django.test import SimpleTestCase

from viewcomponents.exceptions import ComponentValidationError


class TestComponentsInViews(SimpleTestCase):
    def test_state_badge(self):
        response = self.client.get("/badge/", {"color": "red", "label": "Closed"})

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'class="State State--red"')
        self.assertContains(response, ">Closed</span>")

    def test_state_badge_invalid_color(self):
        with self.assertRaises(ComponentValidationError):
            self.client.get("/badge/", {"color": "orange", "label": "Closed"})

    def test_state_badge_without_label(self):
        with self.assertRaises(ComponentValidationError):
            self.client.get("/badge/", {"color": "red"})

    def test_product_link(self):
        response = self.client.get("/shop/products/blue-shoe/")

        self.assertContains(
            response, '<a href="/shop/products/blue-shoe/">Blue-Shoe</a>', html=True
        )
