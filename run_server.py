import uvicorn

if __name__ == "__main__":
    print("\n" + "="*70)
    print("   🚀 Сервер фронт-деска запущен")
    print("="*70)
    print(f"   📍 URL:         http://127.0.0.1:8001")
    print(f"   📖 Docs:        http://127.0.0.1:8001/docs")
    print(f"   💚 Healthcheck: http://127.0.0.1:8001/healthcheck")
    print("="*70 + "\n")

    uvicorn.run("spa_console.main:app", host="127.0.0.1", port=8001, reload=True)
