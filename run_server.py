"""Run the API with uvicorn using the default host and port."""

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("worldcup_api:app", host="0.0.0.0", port=8000)
