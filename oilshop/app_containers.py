from dependency_injector import containers, providers
from oilshop.v1_0.v1_containers import APIContainer

class ApplicationContainer(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
                "oilshop.v1_0.routers.auth_router",
                "oilshop.v1_0.routers.oil_router",
                "oilshop.v1_0.routers.mix_router",
                "oilshop.v1_0.routers.sale_router",
                "oilshop.v1_0.routers.report_router",
            ]
    )
    # async_sessionmaker, overridden in create_app
    session_factory = providers.Object(None)

    api_container = providers.Container(
        APIContainer
    )
