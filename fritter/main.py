from pathlib import Path
import uvicorn

if __name__ == '__main__':

    uvicorn.run("fritter:app", host="127.0.0.1", port=8000, reload=True, reload_dirs=[str(Path(__file__).parent)])
