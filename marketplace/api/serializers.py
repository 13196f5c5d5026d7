from rest_framework import serializers

from authentication.api.serializers import UserSummarySerializer
from marketplace.models import Order, Product
from utils.serializers import DistanceFieldsMixin, StringListField


class ProductSerializer(DistanceFieldsMixin, serializers.ModelSerializer):
    seller = UserSummarySerializer(read_only=True)
    is_in_stock = serializers.ReadOnlyField()
    is_on_sale = serializers.ReadOnlyField()

    class Meta:
        model = Product
        fields = (
            "id",
            "seller",
            "title",
            "description",
            "price",
            "original_price",
            "category",
            "subcategory",
            "images",
            "tags",
            "stock_quantity",
            "is_in_stock",
            "is_on_sale",
            "is_active",
            "featured",
            "condition",
            "brand",
            "warranty",
            "delivery_available",
            "delivery_fee",
            "location",
            "city",
            "latitude",
            "longitude",
            "is_boosted",
            "boost_score",
            "boost_expires_at",
            "distance",
            "distance_display",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class ProductWriteSerializer(serializers.ModelSerializer):
    images = serializers.ListField(child=serializers.URLField(max_length=500), required=False)
    tags = StringListField(required=False)

    class Meta:
        model = Product
        fields = (
            "title",
            "description",
            "price",
            "original_price",
            "category",
            "subcategory",
            "images",
            "tags",
            "stock_quantity",
            "is_active",
            "condition",
            "brand",
            "warranty",
            "delivery_available",
            "delivery_fee",
            "location",
            "city",
            "latitude",
            "longitude",
        )
        extra_kwargs = {"is_active": {"required": False}}

    def validate(self, attrs):
        price = attrs.get("price", getattr(self.instance, "price", None))
        original_price = attrs.get("original_price")
        if original_price is not None and price is not None and original_price < price:
            raise serializers.ValidationError({"original_price": "Original price cannot be below the price"})
        return attrs


class CategorySerializer(serializers.Serializer):
    name = serializers.CharField()
    count = serializers.IntegerField()


class CartProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ("id", "title", "price", "images", "stock_quantity", "is_active", "seller_id", "city")
        read_only_fields = fields


class CartLineSerializer(serializers.Serializer):
    product = CartProductSerializer()
    quantity = serializers.IntegerField()
    line_total = serializers.DecimalField(max_digits=14, decimal_places=2)


class CartSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    items = CartLineSerializer(many=True)
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    shipping = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    item_count = serializers.IntegerField()


class CartItemRequestSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class CartUpdateRequestSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=0)


class CartRemoveRequestSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()


class DeliveryAddressSerializer(serializers.Serializer):
    street = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    postal_code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    country = serializers.CharField(max_length=100, default="Canada")


class CheckoutRequestSerializer(serializers.Serializer):
    delivery_address = DeliveryAddressSerializer()
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class CheckoutResponseSerializer(serializers.Serializer):
    client_secret = serializers.CharField()
    payment_intent_id = serializers.CharField()
    order_ids = serializers.ListField(child=serializers.UUIDField())
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    shipping = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)


class ConfirmPaymentRequestSerializer(serializers.Serializer):
    payment_intent_id = serializers.CharField(max_length=255)


class OrderSerializer(serializers.ModelSerializer):
    buyer = UserSummarySerializer(read_only=True)
    seller = UserSummarySerializer(read_only=True)
    product = CartProductSerializer(read_only=True)
    grand_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Order
        fields = (
            "id",
            "buyer",
            "seller",
            "product",
            "quantity",
            "unit_price",
            "total_price",
            "delivery_fee",
            "grand_total",
            "status",
            "payment_status",
            "delivery_address",
            "tracking_number",
            "notes",
            "payment_intent_id",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=["shipped", "delivered", "cancelled"])
    tracking_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
