"""
Merkle Distributor API (FastAPI)

Read-only HTTP API over a generated proof bundle:
- GET /health - Health check
- GET /stats - Distribution summary
- GET /claims/{recipient} - Amount, proof and calldata for one address
- POST /verify - Check a (recipient, amount, proof) triple

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
