"""
Entry point for running the application with `python -m telescope`.
"""
import uvicorn

if __name__ == "__main__":
    uvicorn.run("telescope.main:app", host="0.0.0.0", port=8001, reload=True)
