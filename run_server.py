"""
Development entry point.

Runs the application factory under uvicorn; configuration comes from the
environment (see ``course_library.settings``).
"""

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("course_library:application", factory=True, host="0.0.0.0", port=8000)
