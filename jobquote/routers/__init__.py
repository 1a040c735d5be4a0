from jobquote.routers.approvals import router as approvals_router
from jobquote.routers.auth import router as auth_router
from jobquote.routers.clients import router as clients_router
from jobquote.routers.estimate import router as estimate_router
from jobquote.routers.invoices import router as invoices_router
from jobquote.routers.quotes import router as quotes_router
