"""
FastAPI routers, one per service:

- health        : `/health`
- accounts      : registration, login, self-service profile, account reads
- books         : book catalog
- directory     : admin directory of accounts and lawyer records
- kyc           : KYC review (mounted only when `KYC_ENABLED`)
- conversations : chat conversations and turns
"""
