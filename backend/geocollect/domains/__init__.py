"""
Domain Layer

包含應用程序的核心領域模型和業務邏輯，按功能領域分為多個子模塊：

- coordinates: WGS84 / GCJ02 / BD09 基準轉換
- acquisition: 客戶端定位會話（單次定位與持續精化）
- geocoding: 多供應商逆地理編碼（高德、百度、騰訊）
- device_data: 採集記錄的保存
- collection: 採集流程編排
"""
