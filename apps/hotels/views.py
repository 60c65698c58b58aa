"""Hotel API views: the public catalogue and the company area."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.http import Http404  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import ValidationError  # type: ignore
from rest_framework.filters import SearchFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework.pagination import PageNumberPagination  # type: ignore
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.services import count_available_rooms, list_rooms_by_type
from apps.users.api.permissions import IsCompanyRole
from apps.users.repositories import CompanyRepository
from shared.infrastructure.storage import InvalidImage

from .models import Hotel
from .repositories import HotelImageRepository, HotelRepository, RoomSelection
from .serializers import (
    AvailabilityQuerySerializer,
    HotelDetailSerializer,
    HotelImageSerializer,
    HotelImageUploadSerializer,
    HotelListSerializer,
    HotelWriteSerializer,
    RoomSerializer,
    RoomTypeQuerySerializer,
)

logger = logging.getLogger(__name__)


class HotelViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Public hotel catalogue.

    Endpoints:
    - GET /api/v1/hotels/?search=&city=&stars= - list hotels
    - GET /api/v1/hotels/{id}/ - hotel with amenities, rooms and images
    - GET /api/v1/hotels/{id}/rooms/?room_type= - rooms of one category
    - GET /api/v1/hotels/{id}/availability/?room_type=&price_per_night=&meal_price=
      - number of rooms still free for that selection
    """

    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_fields = ["city", "stars"]
    search_fields = ["name", "city"]

    def get_queryset(self):  # type: ignore
        include = ("company",)
        if self.action == "retrieve":
            include = ("company", "amenities", "rooms__room_type", "images")
        return HotelRepository().queryset(include=include, tracked=False).order_by("id")

    def get_serializer_class(self):  # type: ignore
        if self.action == "retrieve":
            return HotelDetailSerializer
        return HotelListSerializer

    @action(detail=True, methods=["get"])
    def rooms(self, request, pk=None):  # type: ignore
        hotel = self.get_object()
        query = RoomTypeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        rooms = list_rooms_by_type(hotel.pk, query.validated_data["room_type"])
        return Response(RoomSerializer(rooms, many=True).data)

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        hotel = self.get_object()
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data
        selection = RoomSelection(
            hotel_id=hotel.pk,
            room_type=data["room_type"],
            price_per_night=data["price_per_night"],
            meal_price=data.get("meal_price"),
        )
        return Response({"available_rooms": count_available_rooms(selection)})


class CompanyHotelPagination(PageNumberPagination):
    page_size = settings.COMPANY_PAGE_SIZE


class CompanyHotelViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Hotels of the caller's company.

    Endpoints:
    - GET /api/v1/company/hotels/?search= - paginated list
    - POST /api/v1/company/hotels/ - create, optional ``cover_image``
    - GET|PUT|PATCH|DELETE /api/v1/company/hotels/{id}/
    - GET|POST|DELETE /api/v1/company/hotels/{id}/images/ - gallery
    - DELETE /api/v1/company/hotels/{id}/images/{image_id}/
    """

    permission_classes = [permissions.IsAuthenticated, IsCompanyRole]
    pagination_class = CompanyHotelPagination
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_company(self):
        company = CompanyRepository().for_user(self.request.user.pk)
        if company is None:
            raise Http404("No company found for this user.")
        return company

    def get_queryset(self):  # type: ignore
        repository = HotelRepository()
        company = self.get_company()
        if self.action == "list":
            return repository.for_company(company, self.request.query_params.get("search"))
        return repository.queryset(
            {"company": company},
            include=("company", "amenities", "rooms__room_type", "images"),
            tracked=False,
        )

    def get_serializer_class(self):  # type: ignore
        if self.action == "list":
            return HotelListSerializer
        if self.action in {"create", "update", "partial_update"}:
            return HotelWriteSerializer
        return HotelDetailSerializer

    def _save(self, serializer, hotel: Hotel | None) -> Hotel:
        data = dict(serializer.validated_data)
        upload = data.pop("cover_image", None)
        amenities = data.pop("amenities", None)
        repository = HotelRepository()
        try:
            with transaction.atomic():
                if hotel is None:
                    hotel = repository.create_with_image(Hotel(company=self.get_company(), **data), upload)
                else:
                    for field, value in data.items():
                        setattr(hotel, field, value)
                    repository.update_with_image(hotel, upload)
                repository.commit()
                if amenities is not None:
                    hotel.amenities.set(amenities)
        except InvalidImage as exc:
            raise ValidationError({"cover_image": [str(exc)]})
        return hotel

    def _detail(self, hotel: Hotel, status_code=status.HTTP_200_OK) -> Response:
        hotel = self.get_queryset().get(pk=hotel.pk)
        return Response(HotelDetailSerializer(hotel, context={"request": self.request}).data, status=status_code)

    def create(self, request):  # type: ignore
        serializer = HotelWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        hotel = self._save(serializer, None)
        logger.info(f"Hotel created: {hotel.pk} by company {hotel.company_id}")
        return self._detail(hotel, status.HTTP_201_CREATED)

    def update(self, request, pk=None, partial=False):  # type: ignore
        hotel = self.get_object()
        serializer = HotelWriteSerializer(hotel, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        hotel = self._save(serializer, hotel)
        logger.info(f"Hotel updated: {hotel.pk}")
        return self._detail(hotel)

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):  # type: ignore
        hotel = self.get_object()
        repository = HotelRepository()
        with transaction.atomic():
            repository.delete_with_image(hotel)
            repository.commit()
        logger.info(f"Hotel deleted: {pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["get", "post", "delete"])
    def images(self, request, pk=None):  # type: ignore
        hotel = self.get_object()
        repository = HotelImageRepository()

        if request.method == "GET":
            images = repository.for_hotel(hotel.pk)
            return Response(HotelImageSerializer(images, many=True, context={"request": request}).data)

        if request.method == "DELETE":
            with transaction.atomic():
                deleted = repository.delete_hotel_folder(hotel)
                repository.commit()
            logger.info(f"Gallery cleared for hotel {hotel.pk}: {deleted} image(s)")
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = HotelImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            with transaction.atomic():
                images = repository.create_images(hotel, serializer.validated_data["images"])
                repository.commit()
        except InvalidImage as exc:
            raise ValidationError({"images": [str(exc)]})
        logger.info(f"{len(images)} image(s) added to hotel {hotel.pk}")
        return Response(
            HotelImageSerializer(images, many=True, context={"request": request}).data,
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["delete"], url_path=r"images/(?P<image_id>\d+)")
    def delete_image(self, request, pk=None, image_id=None):  # type: ignore
        hotel = self.get_object()
        repository = HotelImageRepository()
        with transaction.atomic():
            image = repository.get_one({"pk": image_id, "hotel_id": hotel.pk})
            if image is None:
                raise Http404("Image not found.")
            repository.delete_image(image)
            repository.commit()
        logger.info(f"Image {image_id} removed from hotel {hotel.pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)
