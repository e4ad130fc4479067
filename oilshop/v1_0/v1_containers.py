from dependency_injector import containers, providers
from oilshop.v1_0.repositories import (
    OilRepository,
    SaleRepository,
    SaleItemRepository,
    UserRepository,
    )
from oilshop.v1_0.services import (
    AuthService,
    MixService,
    OilService,
    ReportService,
    SaleService,
    )

class APIContainer(containers.DeclarativeContainer):
    oil_repository = providers.Singleton(OilRepository)
    sale_repository = providers.Singleton(SaleRepository)
    sale_item_repository = providers.Singleton(SaleItemRepository)
    user_repository = providers.Singleton(UserRepository)

    oil_service = providers.Singleton(
        OilService,
        oil_repository = oil_repository
    )
    sale_service = providers.Singleton(
        SaleService,
        sale_repository = sale_repository,
        sale_item_repository = sale_item_repository,
        oil_repository = oil_repository
    )
    report_service = providers.Singleton(
        ReportService,
        sale_repository = sale_repository,
        sale_item_repository = sale_item_repository,
        oil_repository = oil_repository
    )
    mix_service = providers.Singleton(
        MixService,
        oil_repository = oil_repository
    )
    auth_service = providers.Singleton(
        AuthService,
        user_repository = user_repository
    )
