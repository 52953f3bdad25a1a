"""Saman (SEP) gateway module."""

from paygate.gateways.saman.extension import (
    GATEWAY_NAME,
    SamanInvoiceExtension,
    get_saman_cell_number,
    get_saman_res_num,
    get_saman_settlement_info,
    get_saman_use_get_method,
    saman_extension,
)
from paygate.gateways.saman.gateway import (
    SamanGateway,
    SamanGatewayAccount,
    SamanOptions,
    SettingsAccountProvider,
)
from paygate.gateways.saman.models import (
    SamanSettlementIbanInfo,
    SamanSettlementInfo,
    SamanTashimTokenRequest,
)

__all__ = [
    "GATEWAY_NAME",
    "SamanGateway",
    "SamanGatewayAccount",
    "SamanInvoiceExtension",
    "SamanOptions",
    "SamanSettlementIbanInfo",
    "SamanSettlementInfo",
    "SamanTashimTokenRequest",
    "SettingsAccountProvider",
    "get_saman_cell_number",
    "get_saman_res_num",
    "get_saman_settlement_info",
    "get_saman_use_get_method",
    "saman_extension",
]
