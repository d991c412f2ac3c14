"""Run the catalog API with uvicorn."""

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("library_catalog:application", factory=True, host="0.0.0.0", port=8000)
