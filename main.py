from salon_booking.main import app

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("salon_booking.main:app", host="0.0.0.0", port=8000, reload=True)
