"""Company Profile

Details of the issuing company printed on every tax invoice.
"""

from pydantic import BaseModel, ConfigDict


class CompanyProfile(BaseModel):
    """
    Issuing company profile

    Loaded once from configuration and frozen; renderers receive it
    explicitly instead of reading module state.
    """

    model_config = ConfigDict(frozen=True)

    name: str = "SUSI CORPORATION"
    tagline1: str = (
        "Mfrs. of : Thermoplastic, Rubber and Polyurethene Moulded Components "
        "for Engineering Industries"
    )
    tagline2: str = (
        "Specialists in : Industrial Components for Bottling Plants, Conveyors, "
        "Packaging Equipments, SPM's and Indigenous for Import Substitutes"
    )
    address: str = (
        "Old # 8, New # 17, Gnanambal Garden II Street, Ayanavaram, Chennai - 600023."
    )
    gstin: str = "33AGPPJ5057R1ZO"
    email: str = "susicorpn@gmail.com"
    mobile: str = "98841 02646"
    bank_name: str = "KARNATAKA BANK LTD."
    bank_branch: str = "Ayanavaram, Chennai - 600023"
    account_no: str = "1592000100049401"
    ifsc_code: str = "KARB0000159"
    jurisdiction: str = "Chennai"
