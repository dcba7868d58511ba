"""Message catalogue for user-facing text (validation, responses, emails).

Locale is always passed in explicitly; nothing here holds a "current" language.
"""

import enum


class Locale(str, enum.Enum):
    EN = "en"
    AR = "ar"


MESSAGES: dict[Locale, dict[str, str]] = {
    Locale.EN: {
        # Validation
        "form.required": "This field is required",
        "form.invalidEmail": "Please enter a valid email address",
        "form.companyEmail": "Please use your company email",
        "form.invalidMobile": "Please enter a valid mobile number",
        "form.invalidDate": "Please enter a valid date (YYYY-MM-DD)",
        "form.pastReadyDate": "Ready date must be today or in the future",
        "form.invalidIncoterm": "Please select a valid incoterm",
        "form.unknownPort": "Please select a port from the list",
        "form.packageRequired": "Add at least one package with length, width, height and quantity",
        "form.positiveNumber": "Must be greater than zero",
        "form.invalidValue": "Invalid value",
        "attachment.type": "{name}: only PDF, DOC, DOCX, JPG, PNG, XLS and XLSX files are accepted",
        "attachment.size": "{name}: file is larger than {max_mb}MB",
        # Responses
        "success.message": "Quote submitted successfully",
        "error.validation": "Please correct the highlighted fields",
        "error.general": "Something went wrong. Please try again.",
        "error.badRequest": "Request body could not be read",
        # Customer email
        "email.customer.subjectQuote": "LCL Quote - {currency} {amount} - {pol} to {pod}",
        "email.customer.subjectNoQuote": "LCL Quote Request Received - {pol} to {pod}",
        "email.customer.heading": "Thank you for your LCL quote request!",
        "email.customer.greeting": "Dear {name},",
        "email.customer.valuedCustomer": "Valued Customer",
        "email.customer.quote": "Your indicative LCL freight is {currency} {amount}, subject to final confirmation.",
        "email.customer.followUpQuote": "Our team will contact you shortly to finalize the details.",
        "email.customer.followUpNoQuote": (
            "We have received your quote request and our pricing team will get back to you "
            "shortly with a competitive rate."
        ),
        "email.customer.signature": "Best regards,<br>Neubox Consolidation Team",
        # Shared email labels
        "email.shipmentDetails": "Shipment Details:",
        "email.customerDetails": "Customer Details:",
        "email.packageDetails": "Package Details:",
        "email.route": "Route",
        "email.readyDate": "Ready Date",
        "email.incoterm": "Incoterm",
        "email.totalCbm": "Total CBM",
        "email.grossWeight": "Gross Weight",
        "email.commodity": "Commodity",
        "email.hazardous": "Hazardous",
        "email.customs": "Customs",
        "email.pickupAddress": "Pickup Address",
        "email.company": "Company",
        "email.contact": "Contact",
        "email.email": "Email",
        "email.mobile": "Mobile",
        "email.attachments": "Attachments",
        "email.userIp": "User IP",
        "email.timestamp": "Timestamp",
        "email.notProvided": "Not provided",
        "options.yes": "Yes",
        "options.no": "No",
        # Internal email
        "email.internal.subject": "New LCL Quote: {company} - {pol} to {pod}",
        "email.internal.heading": "New LCL Quote Request",
        "email.internal.quoteGenerated": "Quote Generated",
        "email.internal.manualPricing": "Manual pricing required",
        "email.internal.fallbackRate": "default rate, route not in rate table",
    },
    Locale.AR: {
        "form.required": "هذا الحقل مطلوب",
        "form.invalidEmail": "يرجى إدخال بريد إلكتروني صحيح",
        "form.companyEmail": "يرجى استخدام البريد الإلكتروني للشركة",
        "form.invalidMobile": "يرجى إدخال رقم هاتف محمول صحيح",
        "form.invalidDate": "يرجى إدخال تاريخ صحيح (YYYY-MM-DD)",
        "form.pastReadyDate": "يجب أن يكون تاريخ الاستعداد اليوم أو في المستقبل",
        "form.invalidIncoterm": "يرجى اختيار شرط تسليم صحيح",
        "form.unknownPort": "يرجى اختيار ميناء من القائمة",
        "form.packageRequired": "أضف طرداً واحداً على الأقل بالطول والعرض والارتفاع والكمية",
        "form.positiveNumber": "يجب أن تكون القيمة أكبر من صفر",
        "form.invalidValue": "قيمة غير صالحة",
        "attachment.type": "{name}: يقبل فقط ملفات PDF و DOC و DOCX و JPG و PNG و XLS و XLSX",
        "attachment.size": "{name}: حجم الملف أكبر من {max_mb} ميغابايت",
        "success.message": "تم إرسال طلب عرض السعر بنجاح",
        "error.validation": "يرجى تصحيح الحقول المحددة",
        "error.general": "حدث خطأ ما. يرجى المحاولة مرة أخرى.",
        "error.badRequest": "تعذر قراءة محتوى الطلب",
        "email.customer.subjectQuote": "عرض سعر شحن جزئي - {amount} {currency} - {pol} إلى {pod}",
        "email.customer.subjectNoQuote": "تم استلام طلب عرض سعر الشحن الجزئي - {pol} إلى {pod}",
        "email.customer.heading": "شكراً لطلبك عرض سعر الشحن الجزئي!",
        "email.customer.greeting": "عزيزي {name}،",
        "email.customer.valuedCustomer": "العميل الكريم",
        "email.customer.quote": "سعر الشحن الاسترشادي هو {amount} {currency}، وذلك خاضع للتأكيد النهائي.",
        "email.customer.followUpQuote": "سيتواصل معك فريقنا قريباً لاستكمال التفاصيل.",
        "email.customer.followUpNoQuote": "لقد استلمنا طلبك وسيعود إليك فريق التسعير قريباً بسعر تنافسي.",
        "email.customer.signature": "مع أطيب التحيات،<br>فريق نيوبوكس للشحن",
        "email.shipmentDetails": "تفاصيل الشحنة:",
        "email.customerDetails": "بيانات العميل:",
        "email.packageDetails": "تفاصيل الطرود:",
        "email.route": "المسار",
        "email.readyDate": "تاريخ الاستعداد",
        "email.incoterm": "شروط التسليم",
        "email.totalCbm": "إجمالي الأمتار المكعبة",
        "email.grossWeight": "الوزن الإجمالي",
        "email.commodity": "البضاعة",
        "email.hazardous": "بضائع خطرة",
        "email.customs": "تخليص جمركي",
        "email.pickupAddress": "عنوان الاستلام",
        "email.company": "الشركة",
        "email.contact": "الشخص المسؤول",
        "email.email": "البريد الإلكتروني",
        "email.mobile": "الهاتف المحمول",
        "email.attachments": "المرفقات",
        "email.userIp": "عنوان IP",
        "email.timestamp": "التوقيت",
        "email.notProvided": "غير متوفر",
        "options.yes": "نعم",
        "options.no": "لا",
        "email.internal.subject": "طلب عرض سعر جديد: {company} - {pol} إلى {pod}",
        "email.internal.heading": "طلب عرض سعر شحن جزئي جديد",
        "email.internal.quoteGenerated": "السعر المحسوب",
        "email.internal.manualPricing": "يتطلب تسعيراً يدوياً",
        "email.internal.fallbackRate": "سعر افتراضي، المسار غير موجود في جدول الأسعار",
    },
}


def resolve_locale(value: str | None, default: str = Locale.EN.value) -> Locale:
    """Map a request-supplied language tag ("ar", "en-GB", "ar,en;q=0.8", None) to a Locale."""
    for candidate in (value, default):
        if not candidate:
            continue
        first = candidate.split(",")[0].split(";")[0]
        tag = first.strip().lower().replace("_", "-").split("-")[0]
        try:
            return Locale(tag)
        except ValueError:
            continue
    return Locale.EN


def translate(key: str, locale: Locale, **params) -> str:
    """Look up a message, falling back to English and then to the key itself."""
    template = MESSAGES[locale].get(key) or MESSAGES[Locale.EN].get(key, key)
    return template.format(**params) if params else template
