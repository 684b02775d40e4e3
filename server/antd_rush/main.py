from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from antd_rush.routers import assist, catalog

app = FastAPI(
    title="antd-rush Server",
    description="Completion and hover resolution for Ant Design components in TSX sources.",
    version="1.0.0"
)

# Editors call in from a local extension host
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers
app.include_router(assist.router)
app.include_router(catalog.router)

@app.get("/api-status")
async def root():
    return {"message": "antd-rush server is running. Visit /docs for API documentation."}
