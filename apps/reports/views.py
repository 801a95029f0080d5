from django.http import HttpResponse
from django.utils.http import content_disposition_header
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from drf_spectacular.types import OpenApiTypes

from apps.stores.services import get_store_by_id, StoreNotFoundError

from .queries import ReportQueries
from .export import ALL_STORES_LABEL, build_recovery_csv, export_filename
from .formatting import format_month_key
from .serializers import (
    # Input serializers
    StoreFilterSerializer,
    DashboardQuerySerializer,
    PeriodQuerySerializer,
    ExportQuerySerializer,
    TimeseriesQuerySerializer,
    # Response serializers
    DashboardResponseSerializer,
    MonthlyBucketSerializer,
    PeriodReportSerializer,
    TimeseriesResponseSerializer,
    ErrorSerializer,
)
from .permissions import CanAccessRequestedStore
from .exceptions import InvalidAmountError, EmptyExportError


STORE_PARAMETER = OpenApiParameter(
    'store_id', OpenApiTypes.UUID, description='Restrict to one store (owners: assigned stores only)'
)


def _invalid_amount_response(error):
    return Response({'error': str(error)}, status=status.HTTP_422_UNPROCESSABLE_ENTITY)


@extend_schema(
    parameters=[
        STORE_PARAMETER,
        OpenApiParameter('date', OpenApiTypes.DATE, description='Reference day (defaults to today)'),
    ],
    responses={
        200: DashboardResponseSerializer,
        403: ErrorSerializer,
        422: ErrorSerializer,
    },
    description="Today and month-to-date totals, with a per-store comparison.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanAccessRequestedStore])
def dashboard(request):
    """Dashboard statistics - thin HTTP handler."""
    query_serializer = DashboardQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = ReportQueries.dashboard_stats(
            user=request.user,
            store_id=params.get('store_id'),
            today=params.get('date'),
        )
    except InvalidAmountError as e:
        return _invalid_amount_response(e)

    return Response(data)


@extend_schema(
    parameters=[STORE_PARAMETER],
    responses={
        200: MonthlyBucketSerializer(many=True),
        403: ErrorSerializer,
        422: ErrorSerializer,
    },
    description="Monthly archive, most recent month first, with a per-store breakdown and recovery rate.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanAccessRequestedStore])
def monthly_archive(request):
    """Monthly archive - thin HTTP handler."""
    query_serializer = StoreFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    try:
        data = ReportQueries.monthly_archive(
            user=request.user,
            store_id=query_serializer.validated_data.get('store_id'),
        )
    except InvalidAmountError as e:
        return _invalid_amount_response(e)

    return Response(data)


@extend_schema(
    parameters=[
        STORE_PARAMETER,
        OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM)'),
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
    ],
    responses={
        200: PeriodReportSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        422: ErrorSerializer,
    },
    description="Recoveries of a month or date range in chronological order, with totals.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanAccessRequestedStore])
def period_report(request):
    """Period report - thin HTTP handler."""
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = ReportQueries.period_report(
            user=request.user,
            store_id=params.get('store_id'),
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
    except InvalidAmountError as e:
        return _invalid_amount_response(e)

    return Response(data)


@extend_schema(
    parameters=[
        STORE_PARAMETER,
        OpenApiParameter('days', OpenApiTypes.INT, description='Number of recorded days', default=14),
    ],
    responses={
        200: TimeseriesResponseSerializer,
        403: ErrorSerializer,
        422: ErrorSerializer,
    },
    description="Per-day expected, recovered and gap over the last recorded days, for charts.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanAccessRequestedStore])
def recovery_timeseries(request):
    """Chart series - thin HTTP handler."""
    query_serializer = TimeseriesQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = ReportQueries.recovery_timeseries(
            user=request.user,
            store_id=params.get('store_id'),
            days=params['days'],
        )
    except InvalidAmountError as e:
        return _invalid_amount_response(e)

    return Response({
        'days': params['days'],
        'data': data,
    })


@extend_schema(
    parameters=[
        STORE_PARAMETER,
        OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM)', required=True),
    ],
    responses={
        (200, 'text/csv'): OpenApiResponse(description='CSV report download'),
        204: OpenApiResponse(description='Nothing to export'),
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
        422: ErrorSerializer,
    },
    description="Download a month of recoveries as a semicolon-separated CSV file.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanAccessRequestedStore])
def export_csv(request):
    """CSV export - thin HTTP handler."""
    query_serializer = ExportQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    store_id = params.get('store_id')
    if store_id:
        try:
            store_label = get_store_by_id(store_id=store_id).name
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    else:
        store_label = ALL_STORES_LABEL

    try:
        rows, totals = ReportQueries.period_records(
            user=request.user,
            store_id=store_id,
            start_date=params['start_date'],
            end_date=params['end_date'],
        )
        content = build_recovery_csv(rows, totals)
    except EmptyExportError:
        return Response(status=status.HTTP_204_NO_CONTENT)
    except InvalidAmountError as e:
        return _invalid_amount_response(e)

    filename = export_filename(store_label, format_month_key(params['period']))
    response = HttpResponse(content, content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = content_disposition_header(True, filename)
    return response
